"""Canonical data models for evaluation records.

All records are read-only inputs to the synthesis engine.  The Record
Store Adapter builds them from heterogeneous stored JSON; everything
downstream works with these shapes only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TRIAL_KEYS: tuple[str, ...] = tuple(f"trial{i}" for i in range(1, 7))


class TestCategory(str, Enum):
    """The five fixed test categories."""

    __test__ = False

    STRENGTH = "Strength"
    ROM_SPINE_EXTREMITY = "ROM Total Spine/Extremity"
    ROM_HAND_FOOT = "ROM Hand/Foot"
    OCCUPATIONAL = "Occupational Tasks"
    CARDIO = "Cardio"

    @property
    def is_rom(self) -> bool:
        return self in (TestCategory.ROM_SPINE_EXTREMITY, TestCategory.ROM_HAND_FOOT)


# Display order for grouped sections.
CATEGORY_ORDER: tuple[TestCategory, ...] = (
    TestCategory.STRENGTH,
    TestCategory.ROM_SPINE_EXTREMITY,
    TestCategory.ROM_HAND_FOOT,
    TestCategory.OCCUPATIONAL,
    TestCategory.CARDIO,
)


class RecordKind(str, Enum):
    """Stored record kinds and the keys they live under."""

    CLAIMANT = "claimantData"
    TESTS = "testData"
    MTM_TESTS = "mtmTestData"
    ACTIVITY_RATINGS = "activityRatingData"
    REFERRAL_ANSWERS = "referralQuestionsData"
    PROTOCOL_SELECTION = "protocolTestsData"
    PAIN_ILLUSTRATION = "painIllustrationData"
    EVALUATOR = "evaluatorData"
    DIGITAL_LIBRARY = "digitalLibraryData"


class EffortLevel(str, Enum):
    """Normalized evaluator effort rating."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class SideMeasurements:
    """Trial values for one side (or an unsided set) of a test.

    ``trials`` is positional: index 0 is ``trial1``.  Missing trials are
    stored as ``None`` so the per-test tables keep their column layout.
    """

    trials: tuple[float | None, ...] = ()
    pre_heart_rate: float | None = None
    post_heart_rate: float | None = None

    @property
    def is_empty(self) -> bool:
        return all(t is None for t in self.trials) and (
            self.pre_heart_rate is None and self.post_heart_rate is None
        )


@dataclass(frozen=True)
class TestRecord:
    """One completed measurement activity.

    ``category`` is ``None`` until the Categorization Engine assigns it;
    ``category_tag`` keeps the raw evaluator/legacy tag it was derived from.
    """

    __test__ = False

    test_id: str
    test_name: str
    category: TestCategory | None = None
    category_tag: str = ""
    left: SideMeasurements = field(default_factory=SideMeasurements)
    right: SideMeasurements = field(default_factory=SideMeasurements)
    measurements: SideMeasurements | None = None
    unit_measure: str = ""
    demonstrated: bool | None = None
    effort: str = ""
    job_match: str = ""
    norm_level: str = ""
    value_to_be_tested: float | None = None
    job_requirements: str = ""
    test_result: str = ""
    comments: str = ""
    observations: str = ""
    image_refs: tuple[str, ...] = ()
    protocol_fields: dict[str, str] = field(default_factory=dict)

    @property
    def left_side(self) -> SideMeasurements:
        """Left side, falling back to an unsided measurement set."""
        if self.left.is_empty and self.measurements is not None:
            return self.measurements
        return self.left

    @property
    def right_side(self) -> SideMeasurements:
        return self.right


@dataclass(frozen=True)
class ActivityRating:
    """Claimant's self-perceived ability for one activity (0-10)."""

    name: str
    rating: float = 0.0


@dataclass(frozen=True)
class StructuredAnswer:
    """Parsed ``STATUS|comments`` referral answer."""

    status: str = ""
    comments: str = ""

    @property
    def is_pass(self) -> bool:
        return "PASS" in self.status.upper()


@dataclass(frozen=True)
class ReferralAnswer:
    """A referral question and the evaluator's answer."""

    question: str
    answer: str = ""
    structured: StructuredAnswer | None = None
    image_refs: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConclusionData:
    """Return-to-work status and observed behavior checklists."""

    return_to_work_status: str = ""
    return_to_work_comments: str = ""
    rpdr_behaviors: dict[str, bool] = field(default_factory=dict)
    ctp_behaviors: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class ClaimantRecord:
    """Claimant identity and intake details."""

    first_name: str = ""
    last_name: str = ""
    claimant_id: str = ""
    claim_number: str = ""
    evaluation_date: str = ""
    date_of_birth: str = ""
    gender: str = ""
    address: str = ""
    height: str = ""
    weight: str = ""
    phone: str = ""
    work_phone: str = ""
    dominant_hand: str = ""
    occupation: str = ""
    employer: str = ""
    referred_by: str = ""
    physician: str = ""
    insurance: str = ""
    resting_pulse: str = ""
    bp_sitting: str = ""
    mechanism_of_injury: str = ""
    photo_ref: str = ""

    @property
    def display_name(self) -> str:
        """``Last, First`` as used on the cover page."""
        parts = [p for p in (self.last_name, self.first_name) if p]
        return ", ".join(parts)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


@dataclass(frozen=True)
class EvaluatorProfile:
    """Evaluator and clinic details shown on the cover and signature block."""

    name: str = ""
    license_no: str = ""
    clinic_name: str = ""
    address: str = ""
    country: str = ""
    city: str = ""
    zipcode: str = ""
    email: str = ""
    phone: str = ""
    fax: str = ""
    website: str = ""
    profile_photo: str = ""
    clinic_logo: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> EvaluatorProfile:
        data = data or {}

        def _s(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            name=_s("name"),
            license_no=_s("licenseNo"),
            clinic_name=_s("clinicName"),
            address=_s("address"),
            country=_s("country"),
            city=_s("city"),
            zipcode=_s("zipcode"),
            email=_s("email"),
            phone=_s("phone"),
            fax=_s("fax"),
            website=_s("website"),
            profile_photo=_s("profilePhoto"),
            clinic_logo=_s("clinicLogo"),
        )

    @property
    def full_address(self) -> str:
        tail = " ".join(p for p in (self.city, self.zipcode) if p)
        return ", ".join(p for p in (self.address, tail, self.country) if p)


@dataclass(frozen=True)
class PainMarker:
    """A symptom marker placed on one anatomical view."""

    view: str
    symbol: str
    label: str = ""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class PainIllustration:
    """Composited body-view images plus the markers drawn on them."""

    view_images: tuple[str, ...] = ()
    markers: tuple[PainMarker, ...] = ()
    image_refs: tuple[str, ...] = ()


@dataclass(frozen=True)
class BlobAsset:
    """A binary library asset (photo, scan, PDF) from the blob store."""

    id: str
    name: str
    mime_type: str = "application/octet-stream"
    data: bytes = b""
    category: str = ""


@dataclass(frozen=True)
class EvaluationSnapshot:
    """Everything the engine needs, read once from the record store."""

    claimant: ClaimantRecord = field(default_factory=ClaimantRecord)
    evaluator: EvaluatorProfile = field(default_factory=EvaluatorProfile)
    tests: tuple[TestRecord, ...] = ()
    activity_ratings: tuple[ActivityRating, ...] = ()
    referral_answers: tuple[ReferralAnswer, ...] = ()
    conclusion: ConclusionData = field(default_factory=ConclusionData)
    pain: PainIllustration = field(default_factory=PainIllustration)
    protocol_selection: tuple[str, ...] = ()
    blob_assets: tuple[BlobAsset, ...] = ()
