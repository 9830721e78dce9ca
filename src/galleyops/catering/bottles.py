"""Bottle disposition from a measured fill level."""

from typing import Optional

from galleyops.catering.models import AirlineRule, BottleAction, BottleAnalysis


def recommend_action(fill_level: float, rule: Optional[AirlineRule] = None) -> BottleAction:
    """Reuse above the reuse cutoff, combine from the combine cutoff up, otherwise discard."""
    if fill_level is None or not 0 <= fill_level <= 100:
        raise ValueError(f"fill_level must be within 0-100, got {fill_level!r}")
    rule = rule or AirlineRule(airline="")
    if fill_level > rule.reuse_threshold:
        return BottleAction.REUSE
    if fill_level >= rule.combine_threshold:
        return BottleAction.COMBINE
    return BottleAction.DISCARD


def record_bottle_check(
    flight_id: str,
    fill_level: int,
    rule: Optional[AirlineRule] = None,
    bottle_type: Optional[str] = None,
    analysis: Optional[str] = None,
) -> BottleAnalysis:
    """Build a BottleAnalysis for a classifier reading, applying the airline's cutoffs."""
    action = recommend_action(fill_level, rule)
    return BottleAnalysis(
        flight_id=flight_id,
        fill_level=int(fill_level),
        recommended_action=action,
        bottle_type=bottle_type,
        ai_analysis=analysis or f"Bottle is {int(fill_level)}% full. Recommended action: {action.value}.",
    )
