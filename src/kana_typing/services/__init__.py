"""アライメントエンジンが利用する外部サービスの実装。"""

from kana_typing.services.base import (
    ReadingLookup,
    ReadingVariationGenerator,
    SequentialInputValidator,
)
from kana_typing.services.dictionary import DictReadingLookup
from kana_typing.services.sequential import VoicingSequentialValidator
from kana_typing.services.variations import DictVariationGenerator

__all__ = [
    "DictReadingLookup",
    "DictVariationGenerator",
    "ReadingLookup",
    "ReadingVariationGenerator",
    "SequentialInputValidator",
    "VoicingSequentialValidator",
]
