"""段階入力の検証器。

フリック入力などでは、濁音・半濁音・小書き仮名は清音を入力してから
変換キーで変化させる（例: は→ば→ぱ）。途中の状態は誤入力ではなく
目標への正当な途中経過として扱う。
"""

from kana_typing.characters import transformation_chain
from kana_typing.services.base import SequentialInputValidator
from kana_typing.types import SequentialCheckResult


class VoicingSequentialValidator(SequentialInputValidator):
    """濁点・半濁点・小書きの変換経路に基づく段階入力検証器。"""

    def check(self, partial_input: str, target_char: str) -> SequentialCheckResult:
        """
        partial_inputがtarget_charへ到達可能かを判定する。

        アルゴリズム:
        1. target_charの変換経路を求める（例: ぱ -> [は, ば, ぱ]）
        2. 完全一致なら有効かつ完了
        3. 経路上の途中状態なら有効かつ継続可能、次の段階を提示
        4. それ以外は無効、経路の先頭を提示

        Args:
            partial_input: 現在の入力バッファ
            target_char: 目標の仮名1文字

        Returns:
            SequentialCheckResult
        """
        path = transformation_chain(target_char)

        if partial_input == target_char:
            return SequentialCheckResult(
                is_valid=True,
                is_complete=True,
                can_continue=False,
                confidence=1.0,
                transformation_path=tuple(path),
            )

        if partial_input and partial_input in path[:-1]:
            step = path.index(partial_input)
            next_char = path[step + 1]
            return SequentialCheckResult(
                is_valid=True,
                is_complete=False,
                can_continue=True,
                confidence=(step + 1) / len(path),
                hint=f"{partial_input} → {next_char}",
                next_possible_chars=(next_char,),
                transformation_path=tuple(path),
            )

        return SequentialCheckResult(
            is_valid=False,
            is_complete=False,
            can_continue=False,
            confidence=0.0,
            hint=f"{path[0]}から入力",
            next_possible_chars=(path[0],),
            transformation_path=tuple(path),
        )
