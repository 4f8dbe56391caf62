"""Static normative tables.

Two tables live here:

* ``JOB_REQUIREMENTS``: physical-demand thresholds used by the job-match
  evaluator, keyed by test-name keyword.  Weight entries carry a
  light/medium-work pair; angle entries carry a functional-minimum /
  normative pair.
* display norms: per-side reference values shown in the per-test blocks
  (``infer_display_norm``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NormType(str, Enum):
    """How a job-requirement entry is compared."""

    WEIGHT = "weight"
    DEGREES = "degrees"
    CARDIO = "cardio"
    GENERAL = "general"


@dataclass(frozen=True)
class JobRequirement:
    """One row of the physical-demand threshold table."""

    key: str
    norm_type: NormType
    unit: str = ""
    light_work: float | None = None
    medium_work: float | None = None
    norm: float | None = None
    functional_min: float | None = None
    description: str = ""

    @property
    def threshold(self) -> float | None:
        """The lower bar: light work for weights, functional minimum for angles."""
        if self.norm_type == NormType.WEIGHT:
            return self.light_work if self.light_work is not None else self.norm
        if self.norm_type == NormType.DEGREES:
            return self.functional_min if self.functional_min is not None else self.norm
        return None


def _weight(key: str, light: float, medium: float, label: str) -> JobRequirement:
    return JobRequirement(
        key=key,
        norm_type=NormType.WEIGHT,
        unit="kg",
        light_work=light,
        medium_work=medium,
        norm=medium,
        description=f"{label} ≥{light:g} kg (Light work) / ≥{medium:g} kg (Medium work)",
    )


def _degrees(key: str, norm: float, functional_min: float, label: str) -> JobRequirement:
    return JobRequirement(
        key=key,
        norm_type=NormType.DEGREES,
        unit="degrees",
        norm=norm,
        functional_min=functional_min,
        description=f"{label} ≥{norm:g}°",
    )


# Ordered: more specific keys precede the generic ones they contain.
JOB_REQUIREMENTS: tuple[tuple[tuple[str, ...], JobRequirement], ...] = (
    (("grip",), _weight("grip", 20, 30, "Grip strength")),
    (("key pinch",), _weight("key pinch", 4.3, 7.0, "Key pinch")),
    (("tip pinch",), _weight("tip pinch", 1.8, 3.7, "Tip pinch")),
    (("palmar pinch",), _weight("palmar pinch", 2.1, 4.3, "Palmar pinch")),
    (("cervical", "flexion"), _degrees("cervical flexion", 45, 45, "Cervical flexion")),
    (("cervical", "extension"), _degrees("cervical extension", 45, 45, "Cervical extension")),
    (("cervical", "lateral"), _degrees("cervical lateral", 35, 35, "Cervical lateral flexion")),
    (("lumbar", "flexion"), _degrees("lumbar flexion", 80, 60, "Lumbar flexion")),
    (("lumbar", "extension"), _degrees("lumbar extension", 20, 15, "Lumbar extension")),
    (("shoulder", "flexion"), _degrees("shoulder flexion", 150, 120, "Shoulder flexion")),
    (("shoulder", "abduction"), _degrees("shoulder abduction", 150, 120, "Shoulder abduction")),
    (("shoulder", "extension"), _degrees("shoulder extension", 45, 30, "Shoulder extension")),
    (("hip", "flexion"), _degrees("hip flexion", 90, 80, "Hip flexion")),
    (("hip", "extension"), _degrees("hip extension", 20, 15, "Hip extension")),
    (("hip", "abduction"), _degrees("hip abduction", 35, 25, "Hip abduction")),
    (("lift",), _weight("lift", 10, 25, "Lift")),
)

_CARDIO_KEYS = ("step", "cardio", "treadmill")

GENERAL_REQUIREMENT = JobRequirement(
    key="general",
    norm_type=NormType.GENERAL,
    description="Functional assessment",
)


def get_job_requirement(test_name: str) -> JobRequirement:
    """Look up the threshold row for *test_name* (case-insensitive)."""
    name = (test_name or "").lower()
    for keys, requirement in JOB_REQUIREMENTS:
        if all(k in name for k in keys):
            return requirement
    if any(k in name for k in _CARDIO_KEYS):
        return JobRequirement(
            key="cardio",
            norm_type=NormType.CARDIO,
            unit="bpm",
            description="Cardiovascular endurance",
        )
    return GENERAL_REQUIREMENT


# ── Display norms ───────────────────────────────────────────────────


@dataclass(frozen=True)
class DisplayNorm:
    """Per-side reference values for a per-test block."""

    unit: str
    left: float | None = None
    right: float | None = None
    kind: str = "other"


_ROM_NAME_KEYWORDS = (
    "range",
    "motion",
    "flexion",
    "extension",
    "abduction",
    "adduction",
    "rotation",
    "dorsi",
    "palmar",
    "radial",
    "ulnar",
    "deviation",
)

# (body-part keywords, motion keywords, excluded keywords, degrees)
_ROM_NORMS: tuple[tuple[tuple[str, ...], tuple[str, ...], tuple[str, ...], float], ...] = (
    (("cervical",), ("flexion",), (), 60),
    (("cervical",), ("extension",), (), 75),
    (("cervical",), ("lateral",), (), 45),
    (("cervical",), ("rotation",), (), 80),
    (("lumbar", "thoraco"), ("flexion",), (), 48),
    (("lumbar", "thoraco"), ("extension",), (), 25),
    (("lumbar", "thoraco"), ("lateral",), (), 25),
    (("lumbar", "thoraco"), ("rotation",), (), 30),
    (("shoulder",), ("flexion",), (), 180),
    (("shoulder",), ("hyperextension",), (), 50),
    (("shoulder",), ("abduction",), (), 180),
    (("shoulder",), ("adduction",), (), 50),
    (("shoulder",), ("internal rotation", "external rotation"), (), 90),
    (("elbow",), ("flexion",), (), 140),
    (("elbow",), ("extension",), (), 0),
    (("forearm",), ("pronation", "supination"), (), 80),
    (("wrist",), ("flexion",), ("extension",), 60),
    (("wrist",), ("extension",), ("flexion",), 60),
    (("wrist",), ("dorsiflexion", "palmar"), (), 60),
    (("wrist",), ("radial", "ulnar"), (), 20),
    (("hip",), ("flexion",), (), 100),
    (("hip",), ("extension",), (), 30),
    (("hip",), ("abduction",), (), 40),
    (("hip",), ("adduction",), (), 20),
    (("hip",), ("internal rotation",), (), 40),
    (("hip",), ("external rotation",), (), 50),
    (("knee",), ("flexion",), (), 150),
    (("knee",), ("extension",), (), 0),
    (("ankle",), ("plantarflexion",), (), 40),
    (("ankle",), ("dorsiflexion",), (), 30),
)


def rom_norm(test_name: str) -> float | None:
    """Clinical reference range of motion in degrees, if known."""
    name = (test_name or "").lower()
    for parts, motions, excluded, degrees in _ROM_NORMS:
        if not any(p in name for p in parts):
            continue
        if any(x in name for x in excluded):
            continue
        if any(m in name for m in motions):
            return degrees
    return None


def infer_display_norm(test_name: str) -> DisplayNorm:
    """Infer unit and per-side norms for a test from its name."""
    name = (test_name or "").lower()
    if not name:
        return DisplayNorm(unit="")
    if any(k in name for k in ("step", "cardio", "treadmill", "mcaft", "kasch")):
        return DisplayNorm(unit="bpm", kind="cardio")
    # Grip/pinch before ROM so "Pinch Strength Palmar" is not read as a wrist motion
    if "grip" in name:
        return DisplayNorm(unit="lb", left=110.5, right=120.8, kind="strength")
    if "pinch" in name:
        return DisplayNorm(unit="lb", left=85.0, right=90.0, kind="strength")
    if any(k in name for k in _ROM_NAME_KEYWORDS):
        value = rom_norm(name)
        return DisplayNorm(unit="deg", left=value, right=value, kind="rom")
    return DisplayNorm(unit="lb", kind="strength")


# Tests that record a different motion in each column instead of a side.
_PAIRED_MOTIONS: tuple[tuple[tuple[str, ...], tuple[str, str]], ...] = (
    (("flexion-extension", "flexion/extension"), ("Flexion", "Extension")),
    (("dorsi-plantar", "dorsi/plantar", "dorsiplantar"), ("Dorsi Flexion", "Plantar Flexion")),
    (("inversion-eversion", "inversion/eversion"), ("Inversion", "Eversion")),
    (("supination-pronation", "supination/pronation"), ("Supination", "Pronation")),
    (
        (
            "internal-external-rotation",
            "internal/external rotation",
            "internal/external-rotation",
            "internal external rotation",
        ),
        ("Internal Rotation", "External Rotation"),
    ),
    (("abduction-adduction", "abduction/adduction"), ("Abduction", "Adduction")),
    (("radial-ulnar", "radial/ulnar", "radial ulnar"), ("Radial Deviation", "Ulnar Deviation")),
    (("thumb-abduction", "thumb abduction"), ("Palmar", "Radial")),
)


def paired_motion_labels(test_id: str, test_name: str) -> tuple[str, str] | None:
    """Row labels for the left/right columns of a paired-motion test, else None.

    ``Cervical Flexion-Extension`` stores flexion as "left" and extension
    as "right", so it reads ``("Flexion", "Extension")``.
    """
    combined = f"{test_id} {test_name}".lower()
    for fragments, labels in _PAIRED_MOTIONS:
        if any(f in combined for f in fragments):
            return labels
    return None
