"""Tests for the categorization cascade."""

from __future__ import annotations

import pytest

from fce_synthesis.categorization import DEFAULT_UNITS, categorize, categorize_all, classify
from fce_synthesis.models import TestCategory
from tests.fakes.fake_records import make_test


class TestClassify:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Lumbar Flexion", TestCategory.ROM_SPINE_EXTREMITY),
            ("Bilateral Hand Grip", TestCategory.STRENGTH),
            ("Fingering", TestCategory.OCCUPATIONAL),
            ("Wrist Flexion", TestCategory.ROM_HAND_FOOT),
            ("Ankle Dorsiflexion", TestCategory.ROM_HAND_FOOT),
            ("Bruce Treadmill", TestCategory.CARDIO),
            ("mCAFT", TestCategory.CARDIO),
            ("Key Pinch", TestCategory.STRENGTH),
            ("Shoulder Abduction", TestCategory.ROM_SPINE_EXTREMITY),
        ],
    )
    def test_by_name(self, name: str, expected: TestCategory) -> None:
        assert classify(name) == expected

    def test_canonical_tag_wins(self) -> None:
        assert classify("Fingering", "Strength") == TestCategory.STRENGTH
        assert classify("Anything", "rom hand/foot") == TestCategory.ROM_HAND_FOOT

    def test_cardio_before_occupational(self) -> None:
        # "walk" is an occupational keyword but treadmill decides first
        assert classify("Treadmill Walk") == TestCategory.CARDIO

    def test_hand_without_motion_is_not_rom(self) -> None:
        assert classify("Hand Grip") == TestCategory.STRENGTH

    def test_hand_rom_tag(self) -> None:
        assert classify("Index MCP", "Hand ROM") == TestCategory.ROM_HAND_FOOT

    def test_occupational_tag(self) -> None:
        assert classify("Custom Activity", "occupational") == TestCategory.OCCUPATIONAL

    def test_default_is_strength(self) -> None:
        assert classify("") == TestCategory.STRENGTH


class TestCategorize:
    def test_assigns_category_and_default_unit(self) -> None:
        record = categorize(make_test("Lumbar Flexion", left=(48, 49, 50)))
        assert record.category == TestCategory.ROM_SPINE_EXTREMITY
        assert record.unit_measure == DEFAULT_UNITS[TestCategory.ROM_SPINE_EXTREMITY]

    def test_keeps_existing_unit(self) -> None:
        record = categorize(make_test("Floor to Waist Lift", unit_measure="kg"))
        assert record.unit_measure == "kg"

    def test_does_not_mutate_input(self) -> None:
        original = make_test("Fingering")
        categorize(original)
        assert original.category is None

    def test_deterministic(self) -> None:
        record = make_test("Cervical Rotation", category_tag="range of motion")
        first = categorize(record)
        assert categorize(first) == first
        assert categorize(record) == first

    def test_preserves_order(self, three_tests) -> None:
        result = categorize_all(three_tests)
        assert [r.test_name for r in result] == [t.test_name for t in three_tests]
        assert [r.category for r in result] == [
            TestCategory.OCCUPATIONAL,
            TestCategory.ROM_SPINE_EXTREMITY,
            TestCategory.STRENGTH,
        ]
