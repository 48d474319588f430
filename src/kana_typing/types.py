"""カスタム型定義。

このモジュールは、表示テキストと入力テキストの対応付け、
および入力検証の結果を表す値オブジェクトを提供する。
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, model_validator

# 入力位置: 0以上
InputPosition = Annotated[
    int,
    Field(ge=0, description="入力テキスト上のカーソル位置（0以上）"),
]

# 複合語として探索する最大文字数: 2〜32
# 2未満では複合語にならず、32を超える探索は無意味
CompoundLength = Annotated[
    int,
    Field(
        ge=2,
        le=32,
        description="複合語探索の最大長（2〜32）",
    ),
]


class CharacterMapping(BaseModel):
    """入力テキストの仮名1文字と表示テキストの対応を表す値オブジェクト。

    input_indexが主キーであり、マッピング列全体で狭義単調増加する。
    複数仮名の読みを持つ漢字では、全ての仮名が同じdisplay_indexと
    kanji_wordを共有する。
    """

    display_index: int = Field(ge=0, description="表示テキスト上のインデックス")
    input_index: int = Field(ge=0, description="入力テキスト上のインデックス")
    display_char: str = Field(description="表示文字")
    input_char: str = Field(description="入力文字（仮名）")
    is_kanji: bool = Field(default=False, description="表示文字が漢字由来かどうか")
    kanji_word: str | None = Field(default=None, description="所属する語（複合語を含む）")
    reading_variations: tuple[str, ...] | None = Field(
        default=None, description="この位置で有効な別読みの仮名"
    )

    model_config = {"frozen": True}  # イミュータブル


class TextMapping(BaseModel):
    """表示テキストと入力テキストの対応付け結果。

    練習開始時に一度だけ構築され、以後は読み取り専用として扱う。
    別読みの付与は新しいTextMappingを返す（mapping.attach_variants参照）。
    """

    display_text: str = Field(description="表示テキスト（漢字仮名交じり）")
    input_text: str = Field(description="入力テキスト（仮名）")
    mappings: tuple[CharacterMapping, ...] = Field(
        default_factory=tuple, description="input_index順の文字対応"
    )
    total_input_length: int = Field(ge=0, description="入力テキストの長さ")

    model_config = {"frozen": True}  # イミュータブル

    @model_validator(mode="after")
    def _check_input_indices(self) -> "TextMapping":
        """input_indexが狭義単調増加かつ入力長未満であることを保証する。"""
        previous = -1
        for item in self.mappings:
            if item.input_index <= previous:
                raise ValueError(
                    f"input_index must be strictly increasing: {item.input_index} after {previous}"
                )
            if item.input_index >= self.total_input_length:
                raise ValueError(
                    f"input_index {item.input_index} out of range ({self.total_input_length})"
                )
            previous = item.input_index
        return self

    def __len__(self) -> int:
        """マッピング数を返す。"""
        return len(self.mappings)

    def __getitem__(self, index: int) -> CharacterMapping:
        """インデックスでマッピングを取得する。"""
        return self.mappings[index]


class ValidationResult(BaseModel):
    """1打鍵ごとの検証結果。"""

    is_valid: bool = False
    is_complete: bool = False
    can_continue: bool = False
    possible_chars: tuple[str, ...] = Field(
        default_factory=tuple, description="この位置で受理される仮名"
    )

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, Any]:
        """辞書に変換する。"""
        return self.model_dump()


class SequentialCheckResult(BaseModel):
    """段階入力（清音→濁音→半濁音など）の検証結果。"""

    is_valid: bool
    is_complete: bool
    can_continue: bool
    confidence: Annotated[float, Field(ge=0.0, le=1.0)] = 0.0
    hint: str = ""
    next_possible_chars: tuple[str, ...] | None = None
    transformation_path: tuple[str, ...] | None = None

    model_config = {"frozen": True}


class DisplaySegments(BaseModel):
    """表示テキストの完了部分・現在文字・残り部分への分割。"""

    completed_part: str = ""
    current_char: str = ""
    remaining_part: str = ""

    model_config = {"frozen": True}

    def join(self) -> str:
        """分割を連結して元の表示テキストを返す。"""
        return self.completed_part + self.current_char + self.remaining_part


class Progress(BaseModel):
    """入力の進捗。"""

    position: int = Field(ge=0)
    total: int = Field(ge=0)
    percent: Annotated[int, Field(ge=0, le=100)]
    finished: bool

    model_config = {"frozen": True}


class KeystrokeOutcome(str, Enum):
    """入力バッファに対する判定。

    COMPLETE: 現在位置の仮名が入力完了（呼び出し側がカーソルを1進める）
    MISTAKE: どの受理経路にも乗らない入力
    PENDING: 段階入力の途中など、入力継続中
    """

    COMPLETE = "complete"
    MISTAKE = "mistake"
    PENDING = "pending"
