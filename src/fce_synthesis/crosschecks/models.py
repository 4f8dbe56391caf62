"""Crosscheck data models: definitions, per-check results, and the report."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

from fce_synthesis.core.config import CrosscheckConfig
from fce_synthesis.models import ReferralAnswer, TestCategory, TestRecord
from fce_synthesis.statistics import TrialStats, trial_stats

CHECK_MARK = "✓"


class CrosscheckId(str, Enum):
    """Identifiers for the fixed crosscheck battery, in display order."""

    RAPID_EXCHANGE = "rapid_exchange"
    GRIP_MVE = "grip_mve"
    PINCH_RATIO = "pinch_ratio"
    DYNAMIC_LIFT_HR = "dynamic_lift_hr"
    ROM_CONSISTENCY = "rom_consistency"
    TEST_RETEST = "test_retest"
    DOMINANT_SIDE = "dominant_side"
    DISTRACTION = "distraction"
    DIAGNOSIS = "diagnosis"
    COEFFICIENT_OF_VARIATION = "coefficient_of_variation"


@dataclass(frozen=True)
class CrosscheckDefinition:
    """Display name and description for one check."""

    check_id: CrosscheckId
    name: str
    description: str


CROSSCHECK_DEFINITIONS: dict[CrosscheckId, CrosscheckDefinition] = {
    d.check_id: d
    for d in (
        CrosscheckDefinition(
            CrosscheckId.RAPID_EXCHANGE,
            "Hand grip rapid exchange",
            "Rapid Exchange Grip was 15% less to equal that of the Std position 2 "
            "Hand Grip measure.",
        ),
        CrosscheckDefinition(
            CrosscheckId.GRIP_MVE,
            "Hand grip MVE",
            "Position 1 through 5 displayed a bell curve showing greatest strength "
            "in position 2-3.",
        ),
        CrosscheckDefinition(
            CrosscheckId.PINCH_RATIO,
            "Pinch grip key/tip/palmar ratio",
            "Key grip was greater than palmar which was greater than tip grip.",
        ),
        CrosscheckDefinition(
            CrosscheckId.DYNAMIC_LIFT_HR,
            "Dynamic lift HR fluctuation",
            "Client displayed an increase in heart rate when weight and/or repetitions "
            "were increased (any dynamic lift: low, mid, high, overhead, or frequent).",
        ),
        CrosscheckDefinition(
            CrosscheckId.ROM_CONSISTENCY,
            "ROM consistency check",
            "During total spine ROM, the client provided three consecutive trials "
            "between 5 degrees and 10% of each other in a six-trial session.",
        ),
        CrosscheckDefinition(
            CrosscheckId.TEST_RETEST,
            "Test/retest trial consistency",
            "When tests were repeated the client displayed similar values and "
            "left/right deficiency.",
        ),
        CrosscheckDefinition(
            CrosscheckId.DOMINANT_SIDE,
            "Dominant side monitoring",
            "It is expected that if the client is Right-Handed, he/she will demonstrate "
            "approx.10% greater values on the dominant side – if Left-Handed then "
            "the values would be close to the same.",
        ),
        CrosscheckDefinition(
            CrosscheckId.DISTRACTION,
            "Distraction test consistency",
            "When performing distraction tests for sustained posture the client should "
            "demonstrate similar limitations and or abilities.",
        ),
        CrosscheckDefinition(
            CrosscheckId.DIAGNOSIS,
            "Consistency with diagnosis",
            "Based on the diagnosis and complaints of the individual it is expected that "
            "those issues would relate to a similar function performance pattern during "
            "testing.",
        ),
        CrosscheckDefinition(
            CrosscheckId.COEFFICIENT_OF_VARIATION,
            "Coefficient of Variation (CV)",
            "We would expect to see a CV less than 15% for a client that is deemed to "
            "be consistent.",
        ),
    )
}


@dataclass(frozen=True)
class CrosscheckResult:
    """Outcome of one check.

    ``passed`` is ``None`` exactly when ``applicable`` is False; the render
    layer shows "N/A" for those rows, never a blank cell.
    """

    check_id: CrosscheckId
    name: str
    description: str
    passed: bool | None
    applicable: bool

    @classmethod
    def outcome(cls, check_id: CrosscheckId, passed: bool) -> CrosscheckResult:
        d = CROSSCHECK_DEFINITIONS[check_id]
        return cls(check_id, d.name, d.description, passed=passed, applicable=True)

    @classmethod
    def not_applicable(cls, check_id: CrosscheckId) -> CrosscheckResult:
        d = CROSSCHECK_DEFINITIONS[check_id]
        return cls(check_id, d.name, d.description, passed=None, applicable=False)

    @property
    def status_text(self) -> str:
        if not self.applicable or self.passed is None:
            return "N/A"
        return "Pass" if self.passed else "Fail"

    @property
    def pass_mark(self) -> str:
        if self.status_text == "N/A":
            return "N/A"
        return CHECK_MARK if self.passed else ""

    @property
    def fail_mark(self) -> str:
        if self.status_text == "N/A":
            return "N/A"
        return "" if self.passed else CHECK_MARK


@dataclass
class CrosscheckReport:
    """All crosscheck results in display order."""

    results: list[CrosscheckResult] = field(default_factory=list)

    @property
    def pass_count(self) -> int:
        return sum(1 for r in self.results if r.passed is True)

    @property
    def fail_count(self) -> int:
        return sum(1 for r in self.results if r.passed is False)

    @property
    def not_applicable_count(self) -> int:
        return sum(1 for r in self.results if not r.applicable)

    def get(self, check_id: CrosscheckId) -> CrosscheckResult:
        """Return the result for *check_id*. Raises KeyError if absent."""
        for result in self.results:
            if result.check_id == check_id:
                return result
        raise KeyError(check_id)


_RAPID_KEYWORDS = ("rapid", "exchange")
_DYNAMIC_KEYWORDS = ("low", "mid", "high", "overhead", "frequent", "dynamic")


class CheckContext:
    """Categorized tests plus derived subsets shared by every check."""

    def __init__(
        self,
        tests: Sequence[TestRecord],
        referral_answers: Sequence[ReferralAnswer] = (),
        config: CrosscheckConfig | None = None,
    ) -> None:
        self.tests = list(tests)
        self.referral_answers = list(referral_answers)
        self.config = config or CrosscheckConfig()
        self._stats: dict[int, TrialStats] = {}

    def stats(self, record: TestRecord) -> TrialStats:
        key = id(record)
        if key not in self._stats:
            self._stats[key] = trial_stats(record)
        return self._stats[key]

    @cached_property
    def measured_tests(self) -> list[TestRecord]:
        """Tests with at least one valid trial on either side."""
        return [t for t in self.tests if self.stats(t).has_data]

    @cached_property
    def grip_tests(self) -> list[TestRecord]:
        return [
            t
            for t in self.tests
            if t.category == TestCategory.STRENGTH
            and any(k in t.test_name.lower() for k in ("grip", "hand"))
        ]

    @cached_property
    def rapid_exchange_tests(self) -> list[TestRecord]:
        return [
            t for t in self.grip_tests if any(k in t.test_name.lower() for k in _RAPID_KEYWORDS)
        ]

    @cached_property
    def pinch_tests(self) -> list[TestRecord]:
        return [
            t
            for t in self.tests
            if t.category == TestCategory.STRENGTH and "pinch" in t.test_name.lower()
        ]

    @cached_property
    def dynamic_lift_tests(self) -> list[TestRecord]:
        result = []
        for t in self.tests:
            name = t.test_name.lower()
            if "lift" in name and any(k in name for k in _DYNAMIC_KEYWORDS):
                result.append(t)
        return result

    @cached_property
    def rom_tests(self) -> list[TestRecord]:
        return [t for t in self.tests if t.category is not None and t.category.is_rom]

    def find_answer(self, fragment: str) -> ReferralAnswer | None:
        """First referral answer whose question contains *fragment*."""
        needle = fragment.lower()
        for answer in self.referral_answers:
            if needle in answer.question.lower():
                return answer
        return None
