"""Normalization of stored JSON into canonical record shapes.

Stored records come from several generations of the intake forms and
use different field names for the same thing.  Everything here is
tolerant: missing or malformed values become safe defaults, never
exceptions.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from fce_synthesis.models import (
    TRIAL_KEYS,
    ActivityRating,
    ClaimantRecord,
    ConclusionData,
    PainIllustration,
    PainMarker,
    ReferralAnswer,
    SideMeasurements,
    StructuredAnswer,
    TestRecord,
)

log = logging.getLogger(__name__)

PAIN_VIEWS: tuple[str, ...] = ("front", "back", "left", "right")

# Referral questions whose answers use the "STATUS|comments" encoding.
STRUCTURED_QUESTION_FRAGMENTS: tuple[str, ...] = (
    "distraction test consistency",
    "consistency with diagnosis",
    "physical demand classification",
)

_PDC_PREFIX = re.compile(r"^\s*pdc\s*:\s*", re.IGNORECASE)
_PROTOCOL_FIELDS = (
    "classification",
    "vo2MaxScore",
    "predictedVO2Max",
    "hbr",
    "aerobicFitnessScore",
    "vo2Max",
    "heartRate",
    "bloodPressure",
    "rpe",
)


def as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def as_number(value: Any) -> float | None:
    """Coerce numbers and numeric strings; anything else is None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def as_tristate(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    text = as_text(value).lower()
    if text in ("true", "yes"):
        return True
    if text in ("false", "no"):
        return False
    return None


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] not in (None, ""):
            return data[key]
    return None


def _heart_rate(value: Any) -> float | None:
    number = as_number(value)
    return number if number is not None and number > 0 else None


def normalize_side(raw: Any) -> SideMeasurements:
    """Build :class:`SideMeasurements` from a ``trial1..trial6`` mapping."""
    data = as_dict(raw)
    return SideMeasurements(
        trials=tuple(as_number(data.get(key)) for key in TRIAL_KEYS),
        pre_heart_rate=_heart_rate(data.get("preHeartRate")),
        post_heart_rate=_heart_rate(data.get("postHeartRate")),
    )


def _side_source(raw: dict[str, Any], side: str) -> Any:
    """Resolve a side under its legacy aliases (``leftMeasurements`` etc.)."""
    cap = side.capitalize()
    nested = as_dict(raw.get("measurements"))
    return _first(raw, f"{side}Measurements", f"measurements{cap}", side) or nested.get(side)


def _image_refs(items: Any) -> tuple[str, ...]:
    refs = []
    for item in items if isinstance(items, list) else []:
        if isinstance(item, str) and item:
            refs.append(item)
        elif isinstance(item, dict):
            ref = _first(item, "url", "path", "src", "name")
            if ref:
                refs.append(str(ref))
    return tuple(refs)


def normalize_test(raw: Any) -> TestRecord:
    """Map one stored test (current or legacy shape) to a :class:`TestRecord`."""
    data = as_dict(raw)
    nested = as_dict(data.get("measurements"))
    unsided = None
    if any(key in nested for key in TRIAL_KEYS):
        unsided = normalize_side(nested)

    observations = data.get("observations")
    if isinstance(observations, list):
        observations = ", ".join(as_text(o) for o in observations if as_text(o))

    name = as_text(_first(data, "testName", "name", "id", "testId"))
    protocol_fields = {
        key: as_text(data[key]) for key in _PROTOCOL_FIELDS if as_text(data.get(key))
    }

    return TestRecord(
        test_id=as_text(_first(data, "testId", "id")) or name,
        test_name=name,
        category_tag=as_text(_first(data, "category", "mtmCategory", "testType")),
        left=normalize_side(_side_source(data, "left")),
        right=normalize_side(_side_source(data, "right")),
        measurements=unsided,
        unit_measure=as_text(data.get("unitMeasure")),
        demonstrated=as_tristate(data.get("demonstrated")),
        effort=as_text(data.get("effort")),
        job_match=as_text(data.get("jobMatch")),
        norm_level=as_text(data.get("normLevel")),
        value_to_be_tested=as_number(_first(data, "valueToBeTestedNumber", "target")),
        job_requirements=as_text(data.get("jobRequirements")),
        test_result=as_text(data.get("testResult")),
        comments=as_text(_first(data, "comments", "description")),
        observations=as_text(observations),
        image_refs=_image_refs(data.get("savedImageData") or data.get("serializedImages")),
        protocol_fields=protocol_fields,
    )


def gather_tests(test_data: Any, mtm_data: Any = None) -> list[TestRecord]:
    """Collect tests from ``testData.tests``, falling back to legacy MTM data."""
    tests = as_dict(test_data).get("tests")
    if not isinstance(tests, list) or not tests:
        if isinstance(mtm_data, dict):
            tests = list(mtm_data.values())
        else:
            tests = as_list(mtm_data)
        if tests:
            log.debug("Using %d legacy MTM test records", len(tests))
    return [normalize_test(t) for t in tests if isinstance(t, dict)]


def parse_structured_answer(text: Any) -> StructuredAnswer | None:
    """Parse the ``STATUS|comments`` encoding; None for a blank answer."""
    raw = as_text(text)
    if not raw:
        return None
    status, _, comments = raw.partition("|")
    status = _PDC_PREFIX.sub("", status).strip()
    return StructuredAnswer(status=status, comments=comments.strip())


def _is_structured_question(question: str) -> bool:
    q = question.lower()
    return any(fragment in q for fragment in STRUCTURED_QUESTION_FRAGMENTS)


def normalize_referrals(raw: Any) -> tuple[list[ReferralAnswer], ConclusionData]:
    """Return referral answers (structured ones pre-parsed) and conclusion data."""
    data = as_dict(raw)
    answers = []
    for item in as_list(data.get("questions")):
        q = as_dict(item)
        question = as_text(q.get("question"))
        if not question:
            continue
        answer = as_text(q.get("answer"))
        structured = parse_structured_answer(answer) if _is_structured_question(question) else None
        answers.append(
            ReferralAnswer(
                question=question,
                answer=answer,
                structured=structured,
                image_refs=_image_refs(q.get("savedImageData")),
            )
        )

    conclusion = as_dict(data.get("conclusionData"))
    rtw = as_dict(conclusion.get("returnToWorkStatus")) or as_dict(data.get("returnToWorkStatus"))
    return answers, ConclusionData(
        return_to_work_status=as_text(rtw.get("status")),
        return_to_work_comments=as_text(rtw.get("comments")),
        rpdr_behaviors=_behaviors(conclusion.get("rpdrBehaviors")),
        ctp_behaviors=_behaviors(conclusion.get("ctpBehaviors")),
    )


def _behaviors(raw: Any) -> dict[str, bool]:
    return {str(k): v is True for k, v in as_dict(raw).items()}


def normalize_claimant(raw: Any) -> ClaimantRecord:
    data = as_dict(raw)

    def _measure(value_key: str, unit_key: str) -> str:
        return f"{as_text(data.get(value_key))} {as_text(data.get(unit_key))}".strip()

    return ClaimantRecord(
        first_name=as_text(data.get("firstName")),
        last_name=as_text(data.get("lastName")),
        claimant_id=as_text(data.get("claimantId")),
        claim_number=as_text(data.get("claimNumber")),
        evaluation_date=as_text(_first(data, "evaluationDate", "dateOfEvaluation")),
        date_of_birth=as_text(_first(data, "dateOfBirth", "dob")),
        gender=as_text(data.get("gender")),
        address=as_text(data.get("address")),
        height=_measure("height", "heightUnit"),
        weight=_measure("weight", "weightUnit"),
        phone=as_text(data.get("phone")),
        work_phone=as_text(data.get("workPhone")),
        dominant_hand=as_text(data.get("dominantHand")),
        occupation=as_text(_first(data, "currentOccupation", "occupation")),
        employer=as_text(data.get("employer")),
        referred_by=as_text(_first(data, "referredBy", "physician")),
        physician=as_text(_first(data, "physician", "referredBy")),
        insurance=as_text(data.get("insurance")),
        resting_pulse=as_text(data.get("restingPulse")),
        bp_sitting=as_text(data.get("bpSitting")),
        mechanism_of_injury=as_text(
            _first(data, "claimantHistory", "mechanismOfInjury", "historyOfInjury")
        ),
        photo_ref=as_text(_first(data, "profilePhoto", "photo")),
    )


def normalize_activity_ratings(raw: Any) -> list[ActivityRating]:
    ratings = []
    for item in as_list(as_dict(raw).get("activities")):
        entry = as_dict(item)
        name = as_text(entry.get("name"))
        if not name:
            continue
        rating = as_number(entry.get("rating")) or 0.0
        ratings.append(ActivityRating(name=name, rating=min(max(rating, 0.0), 10.0)))
    return ratings


def _view_images(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, list):
        return tuple(as_text(v) for v in raw if as_text(v))
    if isinstance(raw, str):
        return tuple(v.strip() for v in raw.split(",") if v.strip())
    urls = as_dict(raw).get("imageUrls")
    return _view_images(urls) if isinstance(urls, list) else ()


def normalize_pain(raw: Any) -> PainIllustration:
    data = as_dict(raw)
    markers = []
    for item in as_list(data.get("markers")):
        m = as_dict(item)
        symbol = as_text(_first(m, "symbol", "type"))
        if not symbol:
            continue
        view = as_text(m.get("view")).lower()
        markers.append(
            PainMarker(
                view=view if view in PAIN_VIEWS else "front",
                symbol=symbol,
                label=as_text(m.get("label")),
                x=as_number(m.get("x")) or 0.0,
                y=as_number(m.get("y")) or 0.0,
            )
        )
    return PainIllustration(
        view_images=_view_images(data.get("compositedViews")),
        markers=tuple(markers),
        image_refs=_image_refs(data.get("savedImageData")),
    )


def normalize_protocol_selection(raw: Any) -> list[str]:
    selected = as_dict(raw).get("selectedTests")
    return [as_text(s) for s in selected if as_text(s)] if isinstance(selected, list) else []
