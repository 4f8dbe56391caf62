"""Checks driven by structured evaluator answers to referral questions."""

from __future__ import annotations

from fce_synthesis.crosschecks.models import CheckContext, CrosscheckId, CrosscheckResult

DISTRACTION_QUESTION = "distraction test consistency"
DIAGNOSIS_QUESTION = "consistency with diagnosis"


def _structured_check(ctx: CheckContext, cid: CrosscheckId, fragment: str) -> CrosscheckResult:
    answer = ctx.find_answer(fragment)
    if answer is None or answer.structured is None or not answer.structured.status:
        return CrosscheckResult.not_applicable(cid)
    return CrosscheckResult.outcome(cid, answer.structured.is_pass)


def check_distraction(ctx: CheckContext) -> CrosscheckResult:
    return _structured_check(ctx, CrosscheckId.DISTRACTION, DISTRACTION_QUESTION)


def check_diagnosis(ctx: CheckContext) -> CrosscheckResult:
    return _structured_check(ctx, CrosscheckId.DIAGNOSIS, DIAGNOSIS_QUESTION)
