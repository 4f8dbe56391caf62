"""Categorization engine: assigns each test to exactly one category.

The cascade runs once per record, right after ingestion.  Downstream
modules read ``TestRecord.category`` and never re-derive it.

Order (first match wins):

1. explicit tag equal to a canonical category label
2. cardio keywords
3. occupational-task keywords / tag
4. ROM hand/foot (body-part keyword **and** motion keyword)
5. ROM total spine/extremity
6. default: Strength
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable

from fce_synthesis.models import TestCategory, TestRecord

log = logging.getLogger(__name__)

CARDIO_KEYWORDS: frozenset[str] = frozenset(
    {
        "step-test",
        "treadmill",
        "mcaft",
        "kasch",
        "ymca",
        "cardio",
        "cardiovascular",
        "aerobic",
        "heart",
    }
)

OCCUPATIONAL_KEYWORDS: frozenset[str] = frozenset(
    {
        "fingering",
        "handling",
        "reach",
        "climb",
        "crawl",
        "stoop",
        "walk",
        "push",
        "pull",
        "crouch",
        "carry",
        "kneel",
        "ladder",
        "balance",
    }
)

HAND_FOOT_KEYWORDS: frozenset[str] = frozenset(
    {"hand", "foot", "finger", "thumb", "wrist", "ankle", "digit", "toe"}
)
MOTION_KEYWORDS: frozenset[str] = frozenset({"flexion", "extension", "abduction", "adduction"})
ROM_TAG_KEYWORDS: frozenset[str] = frozenset({"range", "motion", "rom"})
SPINE_EXTREMITY_KEYWORDS: frozenset[str] = frozenset(
    {"flexion", "extension", "spine", "cervical", "lumbar", "thoracic", "back", "shoulder"}
)

_CANONICAL = {c.value.lower(): c for c in TestCategory}

# Applied when a record carries no unit of its own.
DEFAULT_UNITS: dict[TestCategory, str] = {
    TestCategory.STRENGTH: "lb",
    TestCategory.ROM_SPINE_EXTREMITY: "deg",
    TestCategory.ROM_HAND_FOOT: "deg",
    TestCategory.OCCUPATIONAL: "%IS",
    TestCategory.CARDIO: "bpm",
}


def _has_any(text: str, keywords: Iterable[str]) -> bool:
    return any(kw in text for kw in keywords)


def classify(name: str, tag: str = "") -> TestCategory:
    """Return the category for a test *name* and optional raw *tag*."""
    tag_l = (tag or "").strip().lower()
    if tag_l in _CANONICAL:
        return _CANONICAL[tag_l]

    name_l = (name or "").lower()
    text = f"{name_l} {tag_l}"

    if _has_any(text, CARDIO_KEYWORDS):
        return TestCategory.CARDIO

    if _has_any(text, OCCUPATIONAL_KEYWORDS) or "occupational" in tag_l or "task" in tag_l:
        return TestCategory.OCCUPATIONAL

    name_hand_foot = _has_any(name_l, HAND_FOOT_KEYWORDS) and _has_any(name_l, MOTION_KEYWORDS)
    tag_hand_foot = ("hand" in tag_l or "foot" in tag_l) and _has_any(tag_l, ROM_TAG_KEYWORDS)
    if name_hand_foot or tag_hand_foot:
        return TestCategory.ROM_HAND_FOOT

    if _has_any(tag_l, ROM_TAG_KEYWORDS) or _has_any(name_l, SPINE_EXTREMITY_KEYWORDS):
        return TestCategory.ROM_SPINE_EXTREMITY

    return TestCategory.STRENGTH


def categorize(record: TestRecord) -> TestRecord:
    """Return a copy of *record* with its category (and default unit) assigned."""
    tag = record.category.value if record.category is not None else record.category_tag
    category = classify(record.test_name or record.test_id, tag)
    unit = record.unit_measure or DEFAULT_UNITS[category]
    return dataclasses.replace(record, category=category, unit_measure=unit)


def categorize_all(records: Iterable[TestRecord]) -> list[TestRecord]:
    """Categorize every record, preserving input order."""
    result = [categorize(r) for r in records]
    log.debug("Categorized %d tests", len(result))
    return result
