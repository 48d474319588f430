"""表示テキストと入力テキストの文字対応付け。

表示テキスト（漢字仮名交じり）の各文字に、入力テキスト（仮名）の
何文字が対応するかを決定し、入力位置ごとのCharacterMappingを構築する。
"""

import logging
from collections.abc import Sequence

from kana_typing.characters import reading_matches
from kana_typing.diagnostics import Observer, emit
from kana_typing.services.base import ReadingLookup, ReadingVariationGenerator
from kana_typing.types import CharacterMapping, TextMapping

logger = logging.getLogger(__name__)

# 複合語として探索する最大文字数
MAX_COMPOUND_LENGTH = 10


def build_text_mapping(
    display_text: str,
    input_text: str,
    lookup: ReadingLookup,
    max_compound_length: int = MAX_COMPOUND_LENGTH,
    observer: Observer | None = None,
) -> TextMapping:
    """
    表示テキストと入力テキストの対応付けを構築する。

    アルゴリズム（表示位置ごと）:
    1. 長い順に複合語を探索し、読みが入力の現在位置と前方一致すれば採用
       （最長一致。一致した時点で短い候補は探索しない。平仮名・片仮名の違いは無視する）
    2. 複合語の各漢字には単漢字の読みの長さ分の仮名を割り当てる。
       単漢字の読みが未登録なら、残りの読みを残りの文字数で均等に割る
    3. 複合語がなければ単漢字の読み、読みのない文字は1対1で対応させる
    4. どちらかのカーソルが末尾に達したら終了（残りは捨てる）

    読みデータの不備では例外を投げず、1対1の対応に退化する。

    Args:
        display_text: 表示テキスト
        input_text: 入力テキスト（仮名）
        lookup: 読み辞書
        max_compound_length: 複合語探索の最大長
        observer: 診断イベントのコールバック

    Returns:
        TextMapping
    """
    mappings: list[CharacterMapping] = []
    input_length = len(input_text)
    display_index = 0
    input_index = 0

    while display_index < len(display_text) and input_index < input_length:
        display_char = display_text[display_index]
        found_compound = False

        longest = min(max_compound_length, len(display_text) - display_index)
        for word_length in range(longest, 1, -1):
            word = display_text[display_index : display_index + word_length]
            word_reading = lookup.reading_of(word)
            if not word_reading:
                continue
            word_input = input_text[input_index : input_index + len(word_reading)]
            if not reading_matches(word_input, word_reading):
                continue

            emit(
                logger,
                observer,
                "compound_match",
                word=word,
                reading=word_reading,
                display_index=display_index,
                input_index=input_index,
            )

            cursor = input_index
            for offset, char in enumerate(word):
                if lookup.is_kanji(char):
                    char_reading = lookup.reading_of(char)
                    if char_reading:
                        reading_length = len(char_reading)
                    else:
                        # 残りの読みを残りの文字数で均等に割る（不規則な熟字訓ではずれる）
                        remaining_chars = word_length - offset
                        remaining_reading = word_reading[cursor - input_index :]
                        reading_length = max(1, len(remaining_reading) // remaining_chars)

                    for j in range(reading_length):
                        if cursor + j < input_length:
                            mappings.append(
                                CharacterMapping(
                                    display_index=display_index + offset,
                                    input_index=cursor + j,
                                    display_char=char,
                                    input_char=input_text[cursor + j],
                                    is_kanji=True,
                                    kanji_word=word,
                                )
                            )
                    cursor += reading_length
                else:
                    if cursor < input_length:
                        mappings.append(
                            CharacterMapping(
                                display_index=display_index + offset,
                                input_index=cursor,
                                display_char=char,
                                input_char=input_text[cursor],
                                is_kanji=False,
                                kanji_word=word,
                            )
                        )
                    cursor += 1

            input_index = cursor
            display_index += word_length
            found_compound = True
            break

        if found_compound:
            continue

        if lookup.is_kanji(display_char):
            kana_reading = lookup.reading_of(display_char)
            if kana_reading:
                for j in range(len(kana_reading)):
                    if input_index + j < input_length:
                        mappings.append(
                            CharacterMapping(
                                display_index=display_index,
                                input_index=input_index + j,
                                display_char=display_char,
                                input_char=input_text[input_index + j],
                                is_kanji=True,
                                kanji_word=display_char,
                            )
                        )
                input_index += len(kana_reading)
            else:
                # 読み不明の漢字は1文字分として扱う
                mappings.append(
                    CharacterMapping(
                        display_index=display_index,
                        input_index=input_index,
                        display_char=display_char,
                        input_char=input_text[input_index],
                        is_kanji=True,
                    )
                )
                input_index += 1
        else:
            mappings.append(
                CharacterMapping(
                    display_index=display_index,
                    input_index=input_index,
                    display_char=display_char,
                    input_char=input_text[input_index],
                    is_kanji=False,
                )
            )
            input_index += 1

        display_index += 1

    if len(mappings) != input_length:
        logger.debug(
            "mapping covers %d of %d input characters for %r",
            len(mappings),
            input_length,
            display_text,
        )

    return TextMapping(
        display_text=display_text,
        input_text=input_text,
        mappings=tuple(mappings),
        total_input_length=input_length,
    )


def attach_variants(mapping: TextMapping, variants: Sequence[str]) -> TextMapping:
    """
    漢字のマッピングに別読みの文字を付与した新しいTextMappingを返す。

    各別読み全文の、マッピングと同じ序数位置の文字を付与する。
    短すぎて位置に届かない別読みは無視する。インデックスは変更しない。

    Args:
        mapping: 基本のTextMapping
        variants: base_input_textと同じ構造の別読み全文

    Returns:
        新しいTextMapping（元のmappingは変更しない）
    """
    updated: list[CharacterMapping] = []
    for index, item in enumerate(mapping.mappings):
        if item.is_kanji:
            chars = tuple(variant[index] for variant in variants if index < len(variant))
            item = item.model_copy(update={"reading_variations": chars})
        updated.append(item)
    return mapping.model_copy(update={"mappings": tuple(updated)})


def build_advanced_text_mapping(
    display_text: str,
    base_input_text: str,
    lookup: ReadingLookup,
    generator: ReadingVariationGenerator,
    max_compound_length: int = MAX_COMPOUND_LENGTH,
    observer: Observer | None = None,
) -> TextMapping:
    """別読みを付与した対応付けを構築する（build_text_mapping + attach_variants）。"""
    variants = generator.variants_for(display_text, base_input_text)
    base = build_text_mapping(
        display_text,
        base_input_text,
        lookup,
        max_compound_length=max_compound_length,
        observer=observer,
    )
    return attach_variants(base, variants)


def get_display_position_from_input(mapping: TextMapping, input_position: int) -> int:
    """入力位置に対応する表示位置を返す。入力完了後は表示テキストの長さ。"""
    if input_position >= len(mapping.mappings):
        return len(mapping.display_text)
    if input_position < 0:
        return 0
    return mapping.mappings[input_position].display_index


def get_input_position_from_display(mapping: TextMapping, display_position: int) -> int:
    """表示位置に対応する最初の入力位置を返す。見つからなければ0。"""
    for item in mapping.mappings:
        if item.display_index == display_position:
            return item.input_index
    return 0


def get_target_char_at_position(mapping: TextMapping, input_position: int) -> str:
    """入力位置の目標文字を返す。範囲外なら空文字列。"""
    if not 0 <= input_position < len(mapping.mappings):
        return ""
    return mapping.mappings[input_position].input_char
