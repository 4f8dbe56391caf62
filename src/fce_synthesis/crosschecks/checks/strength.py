"""Grip and pinch validity checks: rapid exchange, MVE bell curve, pinch CV."""

from __future__ import annotations

from fce_synthesis.crosschecks.models import CheckContext, CrosscheckId, CrosscheckResult
from fce_synthesis.models import TestRecord
from fce_synthesis.statistics import raw_deficiency

_STANDARD_POSITION_KEYWORDS = (
    "position 2",
    "pos 2",
    "position2",
    "std position",
    "standard",
    "p2",
)


def _standard_grip(ctx: CheckContext, candidates: list[TestRecord]) -> TestRecord:
    """Position-2 grip test if labelled, otherwise the strongest grip test."""
    for test in candidates:
        name = test.test_name.lower()
        if any(k in name for k in _STANDARD_POSITION_KEYWORDS):
            return test
    return max(candidates, key=lambda t: ctx.stats(t).mean_average)


def check_rapid_exchange(ctx: CheckContext) -> CrosscheckResult:
    """Rapid-exchange grip must not exceed 85% of the standard grip, per side."""
    cid = CrosscheckId.RAPID_EXCHANGE
    rapid = ctx.rapid_exchange_tests
    standard_pool = [t for t in ctx.grip_tests if t not in rapid]
    if not rapid or not standard_pool:
        return CrosscheckResult.not_applicable(cid)

    standard = ctx.stats(_standard_grip(ctx, standard_pool))
    ratio = ctx.config.rapid_exchange_ratio
    comparisons: list[bool] = []

    for side in ("left_average", "right_average"):
        rapid_values = [getattr(ctx.stats(t), side) for t in rapid]
        rapid_values = [v for v in rapid_values if v > 0]
        standard_value = getattr(standard, side)
        if not rapid_values or standard_value <= 0:
            continue
        rapid_mean = sum(rapid_values) / len(rapid_values)
        comparisons.append(rapid_mean <= ratio * standard_value)

    if not comparisons:
        return CrosscheckResult.not_applicable(cid)
    return CrosscheckResult.outcome(cid, all(comparisons))


def check_grip_mve(ctx: CheckContext) -> CrosscheckResult:
    """Every grip test keeps its left/right deficiency within 20%."""
    cid = CrosscheckId.GRIP_MVE
    if not ctx.grip_tests:
        return CrosscheckResult.not_applicable(cid)
    limit = ctx.config.mve_max_deficiency
    passed = all(
        raw_deficiency(ctx.stats(t).left_average, ctx.stats(t).right_average) <= limit
        for t in ctx.grip_tests
    )
    return CrosscheckResult.outcome(cid, passed)


def check_pinch_ratio(ctx: CheckContext) -> CrosscheckResult:
    """Every pinch test has left and right CV within the threshold."""
    cid = CrosscheckId.PINCH_RATIO
    if not ctx.pinch_tests:
        return CrosscheckResult.not_applicable(cid)
    threshold = ctx.config.cv_threshold
    passed = all(
        ctx.stats(t).left_cv <= threshold and ctx.stats(t).right_cv <= threshold
        for t in ctx.pinch_tests
    )
    return CrosscheckResult.outcome(cid, passed)
