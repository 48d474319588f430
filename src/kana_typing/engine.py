"""読み辞書・別読み・段階入力検証をまとめるメインのエンジンクラス。

このモジュールは、対応付け・検証・表示分割のサブシステムへの
統一されたインターフェースを提供するためにFacadeパターンを実装する。
カーソル位置（input_position）は呼び出し側が管理し、各メソッドに渡す。
"""

import os
from pathlib import Path

from pydantic import validate_call

from kana_typing.diagnostics import Observer
from kana_typing.mapping import (
    MAX_COMPOUND_LENGTH,
    build_advanced_text_mapping,
    build_text_mapping,
    get_target_char_at_position,
)
from kana_typing.segmenter import split_text_for_display
from kana_typing.services.base import (
    ReadingLookup,
    ReadingVariationGenerator,
    SequentialInputValidator,
)
from kana_typing.services.dictionary import DictReadingLookup
from kana_typing.services.sequential import VoicingSequentialValidator
from kana_typing.services.variations import DictVariationGenerator
from kana_typing.types import (
    CompoundLength,
    DisplaySegments,
    InputPosition,
    KeystrokeOutcome,
    Progress,
    TextMapping,
    ValidationResult,
)
from kana_typing.validator import validate_input_at_position

# 1にするとパッケージ同梱の読みデータを読み込まない
SKIP_DEFAULT_READINGS_ENV = "KANA_TYPING_SKIP_DEFAULT_READINGS"


def _skip_default_readings() -> bool:
    return os.environ.get(SKIP_DEFAULT_READINGS_ENV, "") not in ("", "0")


class TypingEngine:
    """
    仮名入力練習のための対応付け・検証エンジン。

    このクラスはFacadeとして機能し、読み辞書・別読み生成器・段階入力検証器を
    束ねて以下の機能を提供する。

    サポート機能:
    - 表示テキストと入力テキストの対応付け（複合語の最長一致）
    - 別読みを付与した対応付け
    - 入力位置ごとの検証（別読み・段階入力を許容）
    - 表示テキストの分割と進捗
    """

    @validate_call(config={"arbitrary_types_allowed": True})
    def __init__(
        self,
        lookup: ReadingLookup | None = None,
        generator: ReadingVariationGenerator | None = None,
        sequential: SequentialInputValidator | None = None,
        max_compound_length: CompoundLength = MAX_COMPOUND_LENGTH,
        load_default_readings: bool = True,
        observer: Observer | None = None,
    ) -> None:
        """
        TypingEngineを初期化する。

        Args:
            lookup: 読み辞書。Noneの場合は辞書ベースの実装を使用
            generator: 別読み生成器。Noneの場合は辞書ベースの実装を使用
            sequential: 段階入力検証器。Noneの場合は濁点・半濁点・小書きの検証器
            max_compound_length: 複合語探索の最大長（2〜32）
            load_default_readings: Trueの場合、パッケージ同梱の読みデータを読み込む
                                  （環境変数 KANA_TYPING_SKIP_DEFAULT_READINGS=1 で無効化）
            observer: 診断イベントのコールバック
        """
        use_default = load_default_readings and not _skip_default_readings()

        if lookup is None:
            lookup = DictReadingLookup.from_default() if use_default else DictReadingLookup()
        if generator is None:
            generator = (
                DictVariationGenerator.from_default(lookup)
                if use_default
                else DictVariationGenerator(lookup=lookup)
            )

        self._lookup = lookup
        self._generator = generator
        self._sequential = sequential or VoicingSequentialValidator()
        self._max_compound_length = max_compound_length
        self._observer = observer

    @property
    def lookup(self) -> ReadingLookup:
        return self._lookup

    @property
    def generator(self) -> ReadingVariationGenerator:
        return self._generator

    # 読みデータ
    def add_readings(self, readings: dict[str, str]) -> None:
        """
        読み辞書に読みを追加する。

        Args:
            readings: 表記 -> 読みのマッピング辞書

        Raises:
            TypeError: 読み辞書が辞書ベースの実装でない場合

        Example:
            >>> engine = TypingEngine(load_default_readings=False)
            >>> engine.add_readings({"大学": "だいがく", "大学生": "だいがくせい"})
        """
        if not isinstance(self._lookup, DictReadingLookup):
            raise TypeError("add_readings requires a DictReadingLookup")
        self._lookup.add_readings(readings)

    def add_alternates(self, alternates: dict[str, list[str]]) -> None:
        """
        別読みを追加する。

        Args:
            alternates: 語 -> 別読みリストのマッピング辞書

        Raises:
            TypeError: 別読み生成器が辞書ベースの実装でない場合
        """
        if not isinstance(self._generator, DictVariationGenerator):
            raise TypeError("add_alternates requires a DictVariationGenerator")
        self._generator.add_alternates(alternates)

    def load_readings(self, path: str | Path) -> None:
        """
        JSON形式の読みデータを読み込む。

        辞書ベースの読み辞書・別読み生成器の両方に読み込む。

        Args:
            path: 読みデータファイルへのパス

        Raises:
            FileNotFoundError: ファイルが存在しない場合
            ValueError: ディレクトリが指定された場合、または形式が不正な場合
        """
        if isinstance(self._lookup, DictReadingLookup):
            self._lookup.load(path)
        if isinstance(self._generator, DictVariationGenerator):
            self._generator.load(path)

    # 対応付け
    def align(self, display_text: str, input_text: str) -> TextMapping:
        """表示テキストと入力テキストの対応付けを構築する。"""
        return build_text_mapping(
            display_text,
            input_text,
            self._lookup,
            max_compound_length=self._max_compound_length,
            observer=self._observer,
        )

    def align_with_variants(self, display_text: str, base_input_text: str) -> TextMapping:
        """別読みを付与した対応付けを構築する。"""
        return build_advanced_text_mapping(
            display_text,
            base_input_text,
            self._lookup,
            self._generator,
            max_compound_length=self._max_compound_length,
            observer=self._observer,
        )

    # 検証
    @validate_call
    def validate(
        self, mapping: TextMapping, user_input: str, input_position: InputPosition
    ) -> ValidationResult:
        """
        入力バッファが現在位置に対して有効かを判定する。

        Raises:
            ValidationError: input_positionが負の場合
        """
        return validate_input_at_position(
            mapping,
            user_input,
            input_position,
            variations=self._generator,
            sequential=self._sequential,
            observer=self._observer,
        )

    @validate_call
    def judge(
        self, mapping: TextMapping, user_input: str, input_position: InputPosition
    ) -> KeystrokeOutcome:
        """
        入力バッファを完了・誤入力・入力継続中のいずれかに判定する。

        段階入力の途中（ぱを目標に「は」を入力中など）は誤入力ではなく
        PENDINGとなる。COMPLETEの場合、呼び出し側がカーソルを1進め
        入力バッファをクリアする。

        Returns:
            KeystrokeOutcome
        """
        result = self.validate(mapping, user_input, input_position)
        if result.is_complete:
            return KeystrokeOutcome.COMPLETE
        if not result.can_continue and user_input:
            return KeystrokeOutcome.MISTAKE
        return KeystrokeOutcome.PENDING

    # 表示
    @validate_call
    def segment(self, mapping: TextMapping, input_position: InputPosition) -> DisplaySegments:
        """表示テキストを完了部分・現在文字・残り部分に分割する。"""
        return split_text_for_display(mapping, input_position)

    @validate_call
    def target_char(self, mapping: TextMapping, input_position: InputPosition) -> str:
        """入力位置の目標文字を返す。入力完了後は空文字列。"""
        return get_target_char_at_position(mapping, input_position)

    @staticmethod
    def progress(mapping: TextMapping, input_position: int) -> Progress:
        """
        入力の進捗を返す。

        位置は [0, total_input_length] に丸める。パーセントは四捨五入。

        Example:
            >>> mapping = TypingEngine(load_default_readings=False).align("あいう", "あいう")
            >>> TypingEngine.progress(mapping, 1).percent
            33
        """
        total = mapping.total_input_length
        position = min(max(input_position, 0), total)
        percent = int(position * 100 / total + 0.5) if total else 0
        return Progress(
            position=position,
            total=total,
            percent=percent,
            finished=position >= total,
        )
