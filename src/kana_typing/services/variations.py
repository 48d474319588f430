"""辞書ベースの別読み生成器。

「今日（きょう／こんにち）」のように複数の読みを持つ語について、
別読みを登録し、入力テキスト全体の別読み版を生成する。
"""

import logging
import warnings
from pathlib import Path

from kana_typing.characters import normalize_reading, reading_matches, to_script_of
from kana_typing.services.base import ReadingLookup, ReadingVariationGenerator
from kana_typing.services.dictionary import DEFAULT_READINGS_PATH, load_reading_data
from kana_typing.types import TextMapping

logger = logging.getLogger(__name__)


class DictVariationGenerator(ReadingVariationGenerator):
    """
    語 -> 別読みリストの辞書に基づく別読み生成器。

    全文の別読みを作るには、基本の入力テキストで対応付けを構築して
    語の位置を求める必要があるため、ReadingLookupを併用する。
    """

    def __init__(
        self,
        lookup: ReadingLookup | None = None,
        alternates: dict[str, list[str]] | None = None,
    ) -> None:
        """
        生成器を初期化する。

        Args:
            lookup: 語の基本読みを引くための辞書（variants_forで使用）
            alternates: 語 -> 別読みリストのマッピング
        """
        self.lookup = lookup
        self.alternates: dict[str, list[str]] = {}
        if alternates:
            self.add_alternates(alternates)

    def add_alternates(self, alternates: dict[str, list[str]]) -> None:
        """
        別読みを追加する。既存の別読みとは重複なく結合する。

        Args:
            alternates: 語 -> 別読みリストのマッピング

        Example:
            >>> generator = DictVariationGenerator()
            >>> generator.add_alternates({"今日": ["こんにち"], "明日": ["あす"]})
        """
        for word, readings in alternates.items():
            if not word:
                raise ValueError("word cannot be empty")
            current = self.alternates.setdefault(word, [])
            for reading in readings:
                normalized = normalize_reading(reading)
                if normalized and normalized not in current:
                    current.append(normalized)

    def load(self, path: str | Path) -> None:
        """JSONファイルの"alternates"を読み込み、既存の辞書に追加する。"""
        data = load_reading_data(path)
        entries: dict[str, list[str]] = {}
        skipped = 0
        for word, readings in data["alternates"].items():
            if isinstance(readings, list) and all(isinstance(r, str) for r in readings):
                entries[word] = readings
            else:
                skipped += 1
        if skipped:
            warnings.warn(
                f"Skipped {skipped} malformed alternate entries in {path}",
                RuntimeWarning,
                stacklevel=2,
            )
        self.add_alternates(entries)

    @classmethod
    def from_default(cls, lookup: ReadingLookup | None = None) -> "DictVariationGenerator":
        """パッケージ同梱のデフォルト別読みを読み込んだインスタンスを返す。"""
        generator = cls(lookup=lookup)
        if DEFAULT_READINGS_PATH.exists():
            generator.load(DEFAULT_READINGS_PATH)
        return generator

    def alternate_readings_of(self, kanji_word: str) -> list[str]:
        """語の別読みのリストを返す。"""
        return list(self.alternates.get(kanji_word, []))

    def variants_for(self, display_text: str, base_input_text: str) -> list[str]:
        """
        入力テキスト全体の別読み版を生成する。

        アルゴリズム:
        1. 基本の入力テキストで対応付けを構築する
        2. 語ごとに、その語に対応付けられた入力範囲（出現ごと）を求める
        3. 範囲と同じ長さの別読みで全ての出現を置き換えた全文を作る

        同じ読みを持つ別の語の位置は置き換えない。長さの異なる別読みは
        位置の対応が崩れるため全文の別読みには含めない（alternate_readings_ofからは引ける）。

        Args:
            display_text: 表示テキスト
            base_input_text: 基本の入力テキスト

        Returns:
            base_input_textと同じ長さの別読み全文のリスト
        """
        if self.lookup is None:
            return []

        # mappingはservices.baseを経由してこのモジュールを読み込むため、ここで読み込む
        from kana_typing.mapping import build_text_mapping

        base_mapping = build_text_mapping(display_text, base_input_text, self.lookup)

        variants: list[str] = []
        for word, readings in self.alternates.items():
            if word not in display_text:
                continue
            spans = _word_spans(base_mapping, word)
            for reading in readings:
                chars = list(base_input_text)
                replaced = False
                for start, end in spans:
                    original = base_input_text[start:end]
                    if len(reading) != len(original) or reading_matches(original, reading):
                        continue
                    chars[start:end] = to_script_of(reading, original)
                    replaced = True
                if not replaced:
                    continue
                variant = "".join(chars)
                if variant not in variants:
                    variants.append(variant)

        logger.debug("generated %d reading variants for %r", len(variants), display_text)
        return variants


def _word_spans(mapping: TextMapping, word: str) -> list[tuple[int, int]]:
    """wordに対応付けられた入力範囲 [start, end) を出現ごとに返す。"""
    spans: list[tuple[int, int]] = []
    start = end = word_display_start = -1
    for item in mapping.mappings:
        continuing = (
            start >= 0
            and item.kanji_word == word
            and item.input_index == end
            and item.display_index < word_display_start + len(word)
        )
        if continuing:
            end += 1
            continue
        if start >= 0:
            spans.append((start, end))
            start = -1
        if item.kanji_word == word:
            start, end = item.input_index, item.input_index + 1
            word_display_start = item.display_index
    if start >= 0:
        spans.append((start, end))
    return spans
