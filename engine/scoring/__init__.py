"""Scoring package for PFT/CFT and body composition."""

from typing import Any

_TABLES = (
    "ScoringTables",
    "EventStandard",
    "Event",
    "Gender",
    "AgeBracket",
    "WeightAgeBracket",
    "age_to_bracket",
    "weight_age_to_bracket",
    "get_tables",
)
_CALCULATOR = (
    "FitnessTestCalculator",
    "FitnessTestResult",
    "EventScore",
    "EventSelection",
    "Classification",
    "score_event",
    "score_plank",
    "compute_full_test",
    "compute_combat_test",
)
_BODY_COMPOSITION = (
    "BodyCompositionAssessment",
    "check_weight_standard",
    "calculate_body_fat",
    "assess_body_composition",
)

__all__ = [*_TABLES, *_CALCULATOR, *_BODY_COMPOSITION]


def __getattr__(name: str) -> Any:
    """Lazy import for scoring submodules."""
    if name in _TABLES:
        from engine.scoring import tables

        return getattr(tables, name)
    elif name in _CALCULATOR:
        from engine.scoring import calculator

        return getattr(calculator, name)
    elif name in _BODY_COMPOSITION:
        from engine.scoring import body_composition

        return getattr(body_composition, name)
    raise AttributeError(f"module 'engine.scoring' has no attribute '{name}'")
