"""kana-typing: Offline alignment and keystroke validation for Japanese kana typing practice.

This library provides:
- Display/input text alignment with greedy longest-match compound words
- Per-position keystroke validation tolerant of alternate readings
- Sequential kana entry (e.g. は → ば → ぱ) as valid intermediate states
- Display segmentation that highlights a kanji until its whole reading is typed

All operations are synchronous, pure functions of their inputs.
"""

from kana_typing.engine import TypingEngine
from kana_typing.mapping import attach_variants, build_advanced_text_mapping, build_text_mapping
from kana_typing.segmenter import split_text_for_display
from kana_typing.types import (
    CharacterMapping,
    DisplaySegments,
    KeystrokeOutcome,
    Progress,
    TextMapping,
    ValidationResult,
)
from kana_typing.validator import validate_input_at_position

__version__ = "0.1.0"
__all__ = [
    "CharacterMapping",
    "DisplaySegments",
    "KeystrokeOutcome",
    "Progress",
    "TextMapping",
    "TypingEngine",
    "ValidationResult",
    "attach_variants",
    "build_advanced_text_mapping",
    "build_text_mapping",
    "split_text_for_display",
    "validate_input_at_position",
]
