"""Shared fixtures for fce-synthesis tests."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from fce_synthesis.categorization import categorize_all
from fce_synthesis.models import (
    ActivityRating,
    ClaimantRecord,
    EvaluationSnapshot,
    EvaluatorProfile,
    ReferralAnswer,
    RecordKind,
    StructuredAnswer,
    TestRecord,
)
from tests.fakes.fake_records import make_test, stored_test

TODAY = date(2026, 3, 2)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def three_tests() -> list[TestRecord]:
    """Grip, lumbar flexion, and fingering, uncategorized and out of display order."""
    return [
        make_test("Fingering", left=(94, 96), effort="Good"),
        make_test("Lumbar Flexion", left=(48, 49, 50), demonstrated=True, effort="fair"),
        make_test(
            "Bilateral Hand Grip",
            left=(92, 108),
            right=(110.4, 129.6),
            test_id="grip",
            effort="excellent",
        ),
    ]


@pytest.fixture
def categorized_tests(three_tests: list[TestRecord]) -> list[TestRecord]:
    return categorize_all(three_tests)


@pytest.fixture
def snapshot(categorized_tests: list[TestRecord]) -> EvaluationSnapshot:
    """A small but complete evaluation."""
    return EvaluationSnapshot(
        claimant=ClaimantRecord(
            first_name="Jane",
            last_name="Doe",
            claim_number="CLM-1001",
            evaluation_date="2026-03-02",
            date_of_birth="1980-06-15",
            dominant_hand="Right",
        ),
        evaluator=EvaluatorProfile(
            name="A. Evaluator", clinic_name="North Clinic", license_no="PT-42"
        ),
        tests=tuple(categorized_tests),
        activity_ratings=(ActivityRating("Sitting", 8), ActivityRating("Lifting", 3)),
        referral_answers=(
            ReferralAnswer(question="1) What are the client's current abilities?", answer="Light duty."),
            ReferralAnswer(
                question="6a) Distraction Test Consistency",
                answer="PASS|Consistent when distracted",
                structured=StructuredAnswer("PASS", "Consistent when distracted"),
            ),
            ReferralAnswer(
                question="7) Physical Demand Classification",
                answer="PDC: Medium|Meets job demands",
                structured=StructuredAnswer("Medium", "Meets job demands"),
            ),
            ReferralAnswer(question="9) Conclusion", answer="Fit for modified duties."),
        ),
    )


@pytest.fixture
def stored_records() -> dict[str, Any]:
    """Raw records keyed the way the intake forms save them."""
    return {
        RecordKind.CLAIMANT.value: {
            "firstName": "Jane",
            "lastName": "Doe",
            "claimNumber": "CLM-1001",
            "dateOfBirth": "06/15/1980",
            "height": "170",
            "heightUnit": "cm",
        },
        RecordKind.TESTS.value: {
            "tests": [
                stored_test("Lumbar Flexion", left=[48, 49, 50], demonstrated="true"),
                stored_test("Fingering", measurements={"trial1": "94", "trial2": 96}),
                stored_test("Bilateral Hand Grip", left=[92, 108], right=[110.4, 129.6]),
            ]
        },
        RecordKind.REFERRAL_ANSWERS.value: {
            "questions": [
                {"question": "Consistency with Diagnosis", "answer": "FAIL|Pain pattern differs"},
            ],
            "conclusionData": {
                "returnToWorkStatus": {"status": "Return to Regular Duties", "comments": "No limits"},
                "rpdrBehaviors": {"Grimacing": True, "Stretching": False},
            },
        },
        RecordKind.EVALUATOR.value: {"name": "A. Evaluator", "clinicName": "North Clinic"},
    }
