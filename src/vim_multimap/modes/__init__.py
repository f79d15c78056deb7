"""Mode letters, mode bitsets and the descriptor catalogue."""

from .modeset import (
    ALL_MODES,
    CANONICAL_DESCRIPTORS,
    ModeSet,
    canonical_descriptor,
)
from .permutations import MODE_LETTERS, mode_letter_catalogue, permutations

__all__ = [
    "ModeSet",
    "ALL_MODES",
    "CANONICAL_DESCRIPTORS",
    "canonical_descriptor",
    "MODE_LETTERS",
    "permutations",
    "mode_letter_catalogue",
]
