"""Crosscheck engine: runs the fixed validity battery over a test set."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from fce_synthesis.core.config import CrosscheckConfig
from fce_synthesis.crosschecks.checks.effort import check_dynamic_lift_hr, check_rom_consistency
from fce_synthesis.crosschecks.checks.referral import check_diagnosis, check_distraction
from fce_synthesis.crosschecks.checks.strength import (
    check_grip_mve,
    check_pinch_ratio,
    check_rapid_exchange,
)
from fce_synthesis.crosschecks.checks.variability import (
    check_coefficient_of_variation,
    check_dominant_side,
    check_test_retest,
)
from fce_synthesis.crosschecks.models import (
    CheckContext,
    CrosscheckId,
    CrosscheckReport,
    CrosscheckResult,
)
from fce_synthesis.models import ReferralAnswer, TestRecord

log = logging.getLogger(__name__)

CheckFn = Callable[[CheckContext], CrosscheckResult]

DEFAULT_CHECKS: tuple[tuple[CrosscheckId, CheckFn], ...] = (
    (CrosscheckId.RAPID_EXCHANGE, check_rapid_exchange),
    (CrosscheckId.GRIP_MVE, check_grip_mve),
    (CrosscheckId.PINCH_RATIO, check_pinch_ratio),
    (CrosscheckId.DYNAMIC_LIFT_HR, check_dynamic_lift_hr),
    (CrosscheckId.ROM_CONSISTENCY, check_rom_consistency),
    (CrosscheckId.TEST_RETEST, check_test_retest),
    (CrosscheckId.DOMINANT_SIDE, check_dominant_side),
    (CrosscheckId.DISTRACTION, check_distraction),
    (CrosscheckId.DIAGNOSIS, check_diagnosis),
    (CrosscheckId.COEFFICIENT_OF_VARIATION, check_coefficient_of_variation),
)


class CrosscheckEngine:
    """Evaluates every consistency crosscheck over categorized test records.

    Pure computation over an immutable snapshot.  Each check runs
    independently; a check that raises is logged and reported as N/A so
    the rest of the battery still renders.
    """

    def __init__(
        self,
        config: CrosscheckConfig | None = None,
        checks: Sequence[tuple[CrosscheckId, CheckFn]] = DEFAULT_CHECKS,
    ) -> None:
        self._config = config or CrosscheckConfig()
        self._checks = tuple(checks)

    def run(
        self,
        tests: Sequence[TestRecord],
        referral_answers: Sequence[ReferralAnswer] = (),
    ) -> CrosscheckReport:
        """Run the battery and return results in display order."""
        uncategorized = [t.test_id for t in tests if t.category is None]
        if uncategorized:
            log.warning("Crosschecks received %d uncategorized tests", len(uncategorized))

        ctx = CheckContext(tests, referral_answers, self._config)
        report = CrosscheckReport()
        for check_id, check in self._checks:
            try:
                report.results.append(check(ctx))
            except Exception:
                log.exception("Crosscheck %s failed", check_id.value)
                report.results.append(CrosscheckResult.not_applicable(check_id))

        log.debug(
            "Crosschecks: %d pass, %d fail, %d n/a",
            report.pass_count,
            report.fail_count,
            report.not_applicable_count,
        )
        return report
