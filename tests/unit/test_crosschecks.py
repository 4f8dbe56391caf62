"""Tests for the consistency crosscheck battery."""

from __future__ import annotations

from fce_synthesis.categorization import categorize_all
from fce_synthesis.core.config import CrosscheckConfig
from fce_synthesis.crosschecks import (
    CheckContext,
    CrosscheckEngine,
    CrosscheckId,
    CrosscheckReport,
    CrosscheckResult,
)
from fce_synthesis.crosschecks.checks.effort import has_consistent_window
from fce_synthesis.models import ReferralAnswer, StructuredAnswer, TestRecord
from tests.fakes.fake_records import make_side, make_test


def _run(tests: list[TestRecord], answers: list[ReferralAnswer] | None = None) -> CrosscheckReport:
    return CrosscheckEngine().run(categorize_all(tests), answers or [])


def _answer(question: str, status: str) -> ReferralAnswer:
    return ReferralAnswer(
        question=question,
        answer=f"{status}|notes",
        structured=StructuredAnswer(status, "notes"),
    )


class TestCrosscheckResult:
    def test_not_applicable_marks(self) -> None:
        result = CrosscheckResult.not_applicable(CrosscheckId.PINCH_RATIO)
        assert result.passed is None
        assert result.status_text == "N/A"
        assert result.pass_mark == "N/A"
        assert result.fail_mark == "N/A"

    def test_pass_and_fail_marks(self) -> None:
        passed = CrosscheckResult.outcome(CrosscheckId.PINCH_RATIO, True)
        failed = CrosscheckResult.outcome(CrosscheckId.PINCH_RATIO, False)
        assert (passed.pass_mark, passed.fail_mark) == ("✓", "")
        assert (failed.pass_mark, failed.fail_mark) == ("", "✓")
        assert failed.status_text == "Fail"


class TestEngine:
    def test_all_checks_reported_in_order(self) -> None:
        report = _run([])
        assert [r.check_id for r in report.results] == list(CrosscheckId)
        assert report.not_applicable_count == len(CrosscheckId)

    def test_failing_check_becomes_not_applicable(self) -> None:
        def _boom(ctx: CheckContext) -> CrosscheckResult:
            raise ZeroDivisionError("bad data")

        engine = CrosscheckEngine(checks=[(CrosscheckId.GRIP_MVE, _boom)])
        report = engine.run([])
        assert report.get(CrosscheckId.GRIP_MVE).applicable is False

    def test_scenario_counts(self, categorized_tests: list[TestRecord]) -> None:
        report = CrosscheckEngine().run(categorized_tests)
        assert report.get(CrosscheckId.GRIP_MVE).passed is True
        assert report.get(CrosscheckId.ROM_CONSISTENCY).passed is False
        assert report.get(CrosscheckId.DOMINANT_SIDE).passed is False
        assert report.get(CrosscheckId.TEST_RETEST).passed is True
        assert report.get(CrosscheckId.COEFFICIENT_OF_VARIATION).passed is True
        assert report.pass_count == 3
        assert report.fail_count == 2
        assert report.not_applicable_count == 5


class TestPinchRatio:
    def test_no_pinch_tests(self) -> None:
        report = _run([make_test("Hand Grip", left=(40,), right=(42,))])
        result = report.get(CrosscheckId.PINCH_RATIO)
        assert result.applicable is False
        assert result.passed is None

    def test_one_consistent_pinch_test(self) -> None:
        # left CV 10, right CV 12
        pinch = make_test("Key Pinch", left=(9, 11), right=(22, 28))
        report = _run([make_test("Hand Grip", left=(40,), right=(42,)), pinch])
        result = report.get(CrosscheckId.PINCH_RATIO)
        assert result.applicable is True
        assert result.passed is True

    def test_inconsistent_pinch_fails(self) -> None:
        report = _run([make_test("Tip Pinch", left=(5, 15), right=(10, 10))])
        assert report.get(CrosscheckId.PINCH_RATIO).passed is False


class TestGripChecks:
    def test_mve_within_limit(self) -> None:
        report = _run([make_test("Hand Grip", left=(100,), right=(120,))])
        assert report.get(CrosscheckId.GRIP_MVE).passed is True

    def test_mve_over_limit(self) -> None:
        report = _run([make_test("Hand Grip", left=(70,), right=(100,))])
        assert report.get(CrosscheckId.GRIP_MVE).passed is False

    def test_rapid_exchange_needs_both_tests(self) -> None:
        report = _run([make_test("Rapid Exchange Grip", left=(30,), right=(30,))])
        assert report.get(CrosscheckId.RAPID_EXCHANGE).applicable is False

    def test_rapid_exchange_lower_than_standard(self) -> None:
        report = _run(
            [
                make_test("Hand Grip Position 2", left=(100,), right=(100,)),
                make_test("Rapid Exchange Grip", left=(80,), right=(85,)),
            ]
        )
        assert report.get(CrosscheckId.RAPID_EXCHANGE).passed is True

    def test_rapid_exchange_too_strong(self) -> None:
        report = _run(
            [
                make_test("Hand Grip Position 2", left=(100,), right=(100,)),
                make_test("Rapid Exchange Grip", left=(95,), right=(80,)),
            ]
        )
        assert report.get(CrosscheckId.RAPID_EXCHANGE).passed is False


class TestEffortChecks:
    def test_dynamic_lift_heart_rate_rise(self) -> None:
        lift = TestRecord(
            test_id="low-lift",
            test_name="Dynamic Lift Low",
            left=make_side(20, pre=80, post=104),
        )
        report = _run([lift])
        assert report.get(CrosscheckId.DYNAMIC_LIFT_HR).passed is True

    def test_dynamic_lift_without_heart_rates(self) -> None:
        report = _run([make_test("Frequent Lift", left=(20,))])
        assert report.get(CrosscheckId.DYNAMIC_LIFT_HR).passed is False

    def test_rom_consistency_passes_with_tight_window(self) -> None:
        rom = make_test("Cervical Rotation", left=(60, 70, 71, 72), right=(65, 80))
        report = _run([rom])
        assert report.get(CrosscheckId.ROM_CONSISTENCY).passed is True

    def test_rom_consistency_needs_six_values(self) -> None:
        report = _run([make_test("Lumbar Flexion", left=(48, 49, 50))])
        assert report.get(CrosscheckId.ROM_CONSISTENCY).passed is False

    def test_consistent_window(self) -> None:
        assert has_consistent_window([10, 30, 31, 32, 60, 90]) is True
        assert has_consistent_window([10, 20, 30, 40, 50, 60]) is False
        assert has_consistent_window([1, 2]) is False


class TestVariabilityChecks:
    def test_retest_fails_when_weaker_side_switches(self) -> None:
        report = _run(
            [
                make_test("Hand Grip", left=(90,), right=(100,)),
                make_test("Key Pinch", left=(20,), right=(18,)),
            ]
        )
        assert report.get(CrosscheckId.TEST_RETEST).passed is False

    def test_dominant_side_within_ten_percent(self) -> None:
        report = _run([make_test("Hand Grip", left=(100,), right=(108,))])
        assert report.get(CrosscheckId.DOMINANT_SIDE).passed is True

    def test_dominant_side_needs_bilateral_data(self) -> None:
        report = _run([make_test("Lumbar Flexion", left=(48,))])
        assert report.get(CrosscheckId.DOMINANT_SIDE).applicable is False

    def test_cv_fraction(self) -> None:
        tests = [
            make_test("Hand Grip", left=(50, 150), right=(100,)),
            make_test("Key Pinch", left=(10, 30), right=(20,)),
        ]
        assert _run(tests).get(CrosscheckId.COEFFICIENT_OF_VARIATION).passed is False

    def test_tests_without_trials_count_toward_fractions(self) -> None:
        treadmill = TestRecord(
            test_id="bruce",
            test_name="Bruce Treadmill",
            left=make_side(pre=82, post=131),
        )
        tests = [
            make_test("Hand Grip", left=(100, 100), right=(90, 90)),
            make_test("Rapid Exchange Grip", left=(80, 82), right=(70, 72)),
            make_test("Key Pinch", left=(20, 20), right=(18, 18)),
            make_test("Hand Grip Position 2", left=(50, 150), right=(90,)),
            treadmill,
        ]
        report = _run(tests)
        retest = report.get(CrosscheckId.TEST_RETEST)
        assert (retest.applicable, retest.passed) == (True, True)
        assert report.get(CrosscheckId.COEFFICIENT_OF_VARIATION).passed is True

    def test_variability_not_applicable_without_tests(self) -> None:
        report = _run([])
        assert report.get(CrosscheckId.TEST_RETEST).applicable is False
        assert report.get(CrosscheckId.COEFFICIENT_OF_VARIATION).applicable is False

    def test_threshold_from_config(self) -> None:
        tests = categorize_all([make_test("Key Pinch", left=(9, 11), right=(22, 28))])
        report = CrosscheckEngine(CrosscheckConfig(cv_threshold=11)).run(tests)
        assert report.get(CrosscheckId.PINCH_RATIO).passed is False


class TestReferralChecks:
    def test_structured_answers(self) -> None:
        answers = [
            _answer("6a) Distraction Test Consistency", "PASS"),
            _answer("6b) Consistency with Diagnosis", "FAIL"),
        ]
        report = _run([], answers)
        assert report.get(CrosscheckId.DISTRACTION).passed is True
        assert report.get(CrosscheckId.DIAGNOSIS).passed is False

    def test_blank_status_not_applicable(self) -> None:
        answers = [
            ReferralAnswer(question="Distraction Test Consistency", structured=StructuredAnswer()),
        ]
        report = _run([], answers)
        assert report.get(CrosscheckId.DISTRACTION).applicable is False
        assert report.get(CrosscheckId.DIAGNOSIS).applicable is False
