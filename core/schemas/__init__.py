"""Input record schemas."""

from core.schemas.body_composition import BodyCompositionInput
from core.schemas.fitness import CFTInput, PFTInput

__all__ = [
    "BodyCompositionInput",
    "CFTInput",
    "PFTInput",
]
