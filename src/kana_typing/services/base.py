"""アライメントエンジンが依存する外部サービスの抽象基底クラス。

エンジン本体はこれらを純粋関数として利用するだけで、実装には依存しない。
"""

from abc import ABC, abstractmethod

from kana_typing.types import SequentialCheckResult


class ReadingLookup(ABC):
    """漢字（単漢字または複合語）から仮名の読みを引く辞書。"""

    @abstractmethod
    def reading_of(self, display_unit: str) -> str | None:
        """読みを返す。未登録ならNone。"""

    def has_reading(self, display_unit: str) -> bool:
        """読みが登録されているかどうかを返す。"""
        return bool(self.reading_of(display_unit))

    @abstractmethod
    def is_kanji(self, char: str) -> bool:
        """1文字が漢字かどうかを返す。"""


class ReadingVariationGenerator(ABC):
    """別読みの生成器。"""

    @abstractmethod
    def variants_for(self, display_text: str, base_input_text: str) -> list[str]:
        """base_input_textと同じ構造（同じ序数の意味）を持つ別読み全文のリストを返す。"""

    @abstractmethod
    def alternate_readings_of(self, kanji_word: str) -> list[str]:
        """語の別読みのリストを返す。"""


class SequentialInputValidator(ABC):
    """段階入力（清音→濁音→半濁音など）の検証器。

    契約:
        - partial_input == target_char は有効かつ完了
        - targetへの正当な変換経路上の途中状態は有効かつ継続可能
        - それ以外は無効
    """

    @abstractmethod
    def check(self, partial_input: str, target_char: str) -> SequentialCheckResult:
        """partial_inputがtarget_charに対してどの状態にあるかを返す。"""
