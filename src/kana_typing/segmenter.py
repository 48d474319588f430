"""入力進捗に基づく表示テキストの分割。"""

from kana_typing.types import DisplaySegments, TextMapping


def split_text_for_display(mapping: TextMapping, input_position: int) -> DisplaySegments:
    """
    表示テキストを完了部分・現在文字・残り部分に分割する。

    漢字は読みの入力が全て終わるまで現在文字として強調し続け、
    途中で分割しない。

    Args:
        mapping: 対応付け
        input_position: 入力位置

    Returns:
        DisplaySegments。入力完了後は completed_part が表示テキスト全体。
    """
    display_text = mapping.display_text
    current = next((m for m in mapping.mappings if m.input_index == input_position), None)

    if current is None:
        return DisplaySegments(completed_part=display_text)

    display_position = current.display_index

    if current.is_kanji:
        still_inputting = any(
            m.input_index >= input_position
            for m in mapping.mappings
            if m.display_index == display_position and m.is_kanji
        )
        if not still_inputting:
            return DisplaySegments(
                completed_part=display_text[: display_position + 1],
                remaining_part=display_text[display_position + 1 :],
            )

    return DisplaySegments(
        completed_part=display_text[:display_position],
        current_char=current.display_char,
        remaining_part=display_text[display_position + 1 :],
    )
