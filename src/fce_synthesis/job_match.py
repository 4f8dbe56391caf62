"""Job-match evaluator: Yes/No verdict per test against demand thresholds.

Decision sources are consulted in strict priority order and the first
applicable one decides:

1. evaluator ``jobMatch`` override
2. evaluator ``normLevel`` override
3. numeric comparison of the measured side against a custom target or
   the table threshold
4. ``demonstrated is True``
5. fail
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fce_synthesis.models import TestCategory, TestRecord
from fce_synthesis.norms import JobRequirement, NormType, get_job_requirement
from fce_synthesis.statistics import average

KG_TO_LB = 2.20462

_YES = {"yes", "matched"}
_NO = {"no", "not_matched"}


class MatchSource(str, Enum):
    """Which rule produced the verdict."""

    JOB_MATCH = "job_match"
    NORM_LEVEL = "norm_level"
    NUMERIC = "numeric"
    DEMONSTRATED = "demonstrated"
    DEFAULT = "default"


@dataclass(frozen=True)
class JobMatchVerdict:
    """Outcome of the job-match evaluation for one test."""

    matched: bool
    source: MatchSource
    measured: float | None = None
    target: float | None = None

    @property
    def label(self) -> str:
        return "Yes" if self.matched else "No"


def _yes_no(value: str) -> bool | None:
    v = (value or "").strip().lower()
    if v in _YES:
        return True
    if v in _NO:
        return False
    return None


def side_averages(record: TestRecord) -> tuple[float, float]:
    """Left and right trial averages (0 for a missing side)."""
    return average(record.left_side.trials), average(record.right_side.trials)


def measured_value(record: TestRecord, requirement: JobRequirement) -> float:
    """Pick the side used for comparison.

    Flexion-and-extension tests record flexion as "left", so the left
    average is used; every other test uses the better side.
    """
    left, right = side_averages(record)
    name = record.test_name.lower()
    if requirement.norm_type == NormType.DEGREES and "flexion" in name and "extension" in name:
        return left
    return max(left, right)


def evaluate_job_match(record: TestRecord) -> JobMatchVerdict:
    """Return the job-match verdict for *record*."""
    explicit = _yes_no(record.job_match)
    if explicit is not None:
        return JobMatchVerdict(matched=explicit, source=MatchSource.JOB_MATCH)

    norm_level = _yes_no(record.norm_level)
    if norm_level is not None:
        return JobMatchVerdict(matched=norm_level, source=MatchSource.NORM_LEVEL)

    requirement = get_job_requirement(record.test_name)
    target = record.value_to_be_tested
    if target is None:
        target = requirement.threshold
    value = measured_value(record, requirement)
    if target is not None and value > 0:
        return JobMatchVerdict(
            matched=value >= target,
            source=MatchSource.NUMERIC,
            measured=value,
            target=target,
        )

    if record.demonstrated is True:
        return JobMatchVerdict(matched=True, source=MatchSource.DEMONSTRATED)
    return JobMatchVerdict(matched=False, source=MatchSource.DEFAULT)


def describe_job_requirements(record: TestRecord) -> str:
    """Text for the "Job Requirements" column of the summary table."""
    if record.job_requirements.strip():
        return record.job_requirements.strip()

    requirement = get_job_requirement(record.test_name)
    if requirement.norm_type == NormType.WEIGHT and record.value_to_be_tested is not None:
        unit = record.unit_measure or requirement.unit
        return f"Target: {record.value_to_be_tested:g} {unit}".strip()

    norm_level = _yes_no(record.norm_level)
    if norm_level is True:
        return "Within Normal Limits"
    if norm_level is False:
        return "Below Normal Limits"

    if requirement.norm_type == NormType.WEIGHT:
        return (
            f"≥{requirement.light_work:g} {requirement.unit} (Light) / "
            f"≥{requirement.medium_work:g} {requirement.unit} (Medium)"
        )
    if requirement.norm_type == NormType.DEGREES:
        return f"≥{requirement.functional_min:g}° (Min) / ≥{requirement.norm:g}° (Normal)"
    return "Functional Assessment"


def _fmt_hr(value: float | None) -> str:
    return "" if value is None else f"{value:g}"


def _max_optional(*values: float | None) -> float | None:
    present = [v for v in values if v is not None]
    return max(present) if present else None


def describe_test_results(record: TestRecord) -> str:
    """Text for the "Test Results" column of the summary table."""
    if record.test_result.strip():
        return record.test_result.strip()

    left, right = side_averages(record)
    name = record.test_name.lower()

    if record.category == TestCategory.CARDIO:
        pre = _max_optional(record.left_side.pre_heart_rate, record.right.pre_heart_rate)
        post = _max_optional(record.left_side.post_heart_rate, record.right.post_heart_rate)
        if pre is None and post is None:
            return "Norm"
        return f"{_fmt_hr(pre)}//{_fmt_hr(post)}"

    if record.category == TestCategory.OCCUPATIONAL:
        sides = [v for v in (left, right) if v > 0]
        score = sum(sides) / len(sides) if sides else 0.0
        return f"%IS={score:.1f}"

    if record.category is not None and record.category.is_rom:
        if "lateral" in name and not ("flexion" in name and "extension" in name):
            return f"L={left:.2f} R={right:.2f}"
        return f"F={left:.2f} E={right:.2f}"

    if "lift" in name:
        if "kg" in record.unit_measure.lower():
            left, right = left * KG_TO_LB, right * KG_TO_LB
        return f"L={left:.1f} lbs R={right:.1f} lbs"

    return f"L={left:.1f} R={right:.1f}"
