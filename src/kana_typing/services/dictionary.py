"""辞書ベースの読み検索。

単漢字・複合語から仮名の読みへの直接マッピングを提供する。
読みデータはJSONファイルから読み込むか、add_readingsで追加する。
"""

import json
import logging
import warnings
from pathlib import Path
from typing import Any

from kana_typing.characters import is_kanji, normalize_reading
from kana_typing.services.base import ReadingLookup

logger = logging.getLogger(__name__)

DEFAULT_READINGS_PATH = Path(__file__).parent.parent / "data" / "default_readings.json"

# 読みデータファイルが持つべきキー
EXPECTED_KEYS = {"readings", "alternates"}


def load_reading_data(path: str | Path) -> dict[str, Any]:
    """
    JSON形式の読みデータファイルを読み込む。

    形式:
        {
            "readings": {"大学": "だいがく", ...},
            "alternates": {"今日": ["こんにち"], ...}
        }

    Args:
        path: JSONファイルへのパス

    Returns:
        読み込んだ辞書。欠けているキーは空の辞書で補う。

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ValueError: ディレクトリが指定された場合、またはJSONが辞書でない場合
    """
    data_file = Path(path)
    if not data_file.exists():
        raise FileNotFoundError(f"Reading data not found: {path}")
    if data_file.is_dir():
        raise ValueError(f"Expected file, got directory: {path}")

    with open(data_file, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Invalid reading data format: expected dict, got {type(data)}")

    missing_keys = EXPECTED_KEYS - set(data.keys())
    if missing_keys:
        warnings.warn(
            f"Reading data is missing optional keys: {missing_keys}. "
            "These will be initialized as empty.",
            RuntimeWarning,
            stacklevel=2,
        )

    return {key: data.get(key, {}) for key in EXPECTED_KEYS}


class DictReadingLookup(ReadingLookup):
    """
    単漢字・複合語の読みを保持する辞書。

    読みは登録時に平仮名へ正規化される。
    """

    def __init__(self, readings: dict[str, str] | None = None) -> None:
        """
        辞書を初期化する。

        Args:
            readings: 表記 -> 読みのマッピング
        """
        self.readings: dict[str, str] = {}
        if readings:
            self.add_readings(readings)

    def add_readings(self, readings: dict[str, str]) -> None:
        """
        読みを追加または更新する。

        Args:
            readings: 表記 -> 読みのマッピング辞書

        Raises:
            ValueError: 表記または読みが空の場合

        Example:
            >>> lookup = DictReadingLookup()
            >>> lookup.add_readings({"大学": "だいがく", "生": "せい"})
        """
        for word, reading in readings.items():
            if not word:
                raise ValueError("word cannot be empty")
            normalized = normalize_reading(reading)
            if not normalized:
                raise ValueError(f"reading for {word!r} cannot be empty")
            self.readings[word] = normalized

    def load(self, path: str | Path) -> None:
        """
        JSONファイルから読みを読み込み、既存の辞書に追加する。

        文字列でないエントリはRuntimeWarningを出してスキップする。

        Args:
            path: 読みデータファイルへのパス
        """
        data = load_reading_data(path)
        entries: dict[str, str] = {}
        skipped = 0
        for word, reading in data["readings"].items():
            if isinstance(word, str) and isinstance(reading, str) and word and reading:
                entries[word] = reading
            else:
                skipped += 1
        if skipped:
            warnings.warn(
                f"Skipped {skipped} malformed reading entries in {path}",
                RuntimeWarning,
                stacklevel=2,
            )
        self.add_readings(entries)
        logger.debug("loaded %d readings from %s", len(entries), path)

    @classmethod
    def from_default(cls) -> "DictReadingLookup":
        """パッケージ同梱のデフォルト辞書を読み込んだインスタンスを返す。"""
        lookup = cls()
        if DEFAULT_READINGS_PATH.exists():
            lookup.load(DEFAULT_READINGS_PATH)
        return lookup

    def reading_of(self, display_unit: str) -> str | None:
        """表記の読みを返す。未登録ならNone。"""
        return self.readings.get(display_unit)

    def is_kanji(self, char: str) -> bool:
        """1文字が漢字かどうかを返す。"""
        return is_kanji(char)

    def __len__(self) -> int:
        """登録された表記の数を返す。"""
        return len(self.readings)

    def __contains__(self, display_unit: object) -> bool:
        return display_unit in self.readings
