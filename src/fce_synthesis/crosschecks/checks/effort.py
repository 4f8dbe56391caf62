"""Physiological effort checks: dynamic-lift heart rate and ROM repeatability."""

from __future__ import annotations

from collections.abc import Sequence

from fce_synthesis.crosschecks.models import CheckContext, CrosscheckId, CrosscheckResult
from fce_synthesis.models import TestRecord
from fce_synthesis.statistics import valid_trials


def _first_present(*values: float | None) -> float | None:
    for value in values:
        if value is not None:
            return value
    return None


def _heart_rate_rose(test: TestRecord) -> bool:
    pre = _first_present(test.left_side.pre_heart_rate, test.right_side.pre_heart_rate)
    post = _first_present(test.left_side.post_heart_rate, test.right_side.post_heart_rate)
    return pre is not None and post is not None and post > pre


def check_dynamic_lift_hr(ctx: CheckContext) -> CrosscheckResult:
    """At least one dynamic lift shows post-exercise HR above pre-exercise HR."""
    cid = CrosscheckId.DYNAMIC_LIFT_HR
    if not ctx.dynamic_lift_tests:
        return CrosscheckResult.not_applicable(cid)
    return CrosscheckResult.outcome(cid, any(_heart_rate_rose(t) for t in ctx.dynamic_lift_tests))


def has_consistent_window(
    values: Sequence[float],
    *,
    window: int = 3,
    abs_tolerance: float = 5.0,
    rel_tolerance: float = 0.10,
) -> bool:
    """True if some run of *window* consecutive values is tightly grouped.

    A run qualifies when its spread is within *abs_tolerance* units and
    every value lies within *rel_tolerance* of the run's mean.
    """
    for start in range(len(values) - window + 1):
        run = values[start : start + window]
        mean = sum(run) / window
        if max(run) - min(run) > abs_tolerance:
            continue
        if mean > 0 and all(abs(v - mean) <= rel_tolerance * mean for v in run):
            return True
    return False


def check_rom_consistency(ctx: CheckContext) -> CrosscheckResult:
    """Every ROM test contains three consecutive, tightly grouped trials."""
    cid = CrosscheckId.ROM_CONSISTENCY
    if not ctx.rom_tests:
        return CrosscheckResult.not_applicable(cid)

    cfg = ctx.config
    for test in ctx.rom_tests:
        values = valid_trials(test.left_side.trials) + valid_trials(test.right_side.trials)
        if len(values) < cfg.rom_min_values:
            return CrosscheckResult.outcome(cid, False)
        if not has_consistent_window(
            values,
            window=cfg.rom_window,
            abs_tolerance=cfg.rom_abs_tolerance,
            rel_tolerance=cfg.rom_rel_tolerance,
        ):
            return CrosscheckResult.outcome(cid, False)
    return CrosscheckResult.outcome(cid, True)
