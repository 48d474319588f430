"""入力位置ごとの検証。

複数の読み（別読み）と段階入力（は→ば→ぱ）を許容しながら、
入力途中のバッファが現在位置に対して有効か・完了か・継続可能かを判定する。
"""

import logging

from kana_typing.characters import to_script_of
from kana_typing.diagnostics import Observer, emit
from kana_typing.services.base import ReadingVariationGenerator, SequentialInputValidator
from kana_typing.services.sequential import VoicingSequentialValidator
from kana_typing.types import CharacterMapping, TextMapping, ValidationResult

logger = logging.getLogger(__name__)

_DEFAULT_SEQUENTIAL = VoicingSequentialValidator()


def _dedupe(chars: list[str]) -> list[str]:
    """出現順を保って重複を除く。"""
    return list(dict.fromkeys(chars))


def _position_in_kanji(mapping: TextMapping, target: CharacterMapping) -> int:
    """targetが自身の漢字の読みの中で何文字目かを返す（複合語全体ではない）。"""
    kanji_indices = [
        m.input_index
        for m in mapping.mappings
        if m.display_index == target.display_index and m.is_kanji
    ]
    return kanji_indices.index(target.input_index)


def validate_input_at_position(
    mapping: TextMapping,
    user_input: str,
    input_position: int,
    variations: ReadingVariationGenerator | None = None,
    sequential: SequentialInputValidator | None = None,
    observer: Observer | None = None,
) -> ValidationResult:
    """
    入力バッファが現在位置に対して有効かを判定する。

    アルゴリズム:
    1. 目標文字を候補の起点とする
    2. 漢字なら語の別読みから、自身の漢字内での同じ序数位置の文字を候補に加える
    3. マッピングに付与済みの別読みを候補に加え、重複を除く
    4. 段階入力検証器で目標文字への到達可能性を判定する
    5. 候補一致または段階入力の結果を組み合わせる

    Args:
        mapping: 対応付け
        user_input: 現在の入力バッファ
        input_position: 入力位置（呼び出し側が管理する）
        variations: 語の別読みの取得元
        sequential: 段階入力検証器（省略時は濁点・半濁点・小書きの検証器）
        observer: 診断イベントのコールバック

    Returns:
        ValidationResult。入力完了後の位置では全てFalse・候補なし。
    """
    if (
        input_position < 0
        or input_position >= mapping.total_input_length
        or input_position >= len(mapping.mappings)
    ):
        return ValidationResult()

    target = mapping.mappings[input_position]
    target_char = target.input_char
    possible_chars = [target_char]

    if target.is_kanji and target.kanji_word and variations is not None:
        alternative_readings = variations.alternate_readings_of(target.kanji_word)
        if alternative_readings:
            rank = _position_in_kanji(mapping, target)
            for reading in alternative_readings:
                if rank < len(reading):
                    possible_chars.append(to_script_of(reading[rank], target_char))

    if target.reading_variations:
        possible_chars.extend(target.reading_variations)

    possible_chars = _dedupe(possible_chars)

    checker = sequential if sequential is not None else _DEFAULT_SEQUENTIAL
    sequential_result = checker.check(user_input, target_char)
    emit(
        logger,
        observer,
        "sequential_check",
        user_input=user_input,
        target_char=target_char,
        is_valid=sequential_result.is_valid,
        is_complete=sequential_result.is_complete,
        can_continue=sequential_result.can_continue,
        confidence=sequential_result.confidence,
        hint=sequential_result.hint,
    )

    is_valid_basic = user_input in possible_chars
    emit(
        logger,
        observer,
        "match_check",
        is_valid_basic=is_valid_basic,
        is_valid_advanced=sequential_result.is_valid,
        possible_chars=possible_chars,
    )

    is_valid = is_valid_basic or sequential_result.is_valid
    is_complete = user_input == target_char or (
        sequential_result.is_complete and sequential_result.is_valid
    )
    can_continue = (is_valid_basic and not is_complete) or (
        sequential_result.is_valid and sequential_result.can_continue
    )

    all_possible_chars = list(possible_chars)
    if sequential_result.next_possible_chars:
        all_possible_chars.extend(sequential_result.next_possible_chars)
    # 三段階の変換では経路上の全ての文字を提示する
    path = sequential_result.transformation_path
    if path and len(path) > 2:
        all_possible_chars.extend(path)

    result = ValidationResult(
        is_valid=is_valid,
        is_complete=is_complete,
        can_continue=can_continue,
        possible_chars=tuple(_dedupe(all_possible_chars)),
    )
    emit(
        logger,
        observer,
        "result",
        is_valid=result.is_valid,
        is_complete=result.is_complete,
        can_continue=result.can_continue,
    )
    return result
