"""Tests for display segmentation."""

import pytest

from kana_typing.mapping import build_text_mapping
from kana_typing.segmenter import split_text_for_display
from kana_typing.types import DisplaySegments


class TestSplitTextForDisplay:
    """Test split_text_for_display()."""

    def test_single_kanji(self, sample_lookup):
        """Test a single kanji is current, then completed."""
        mapping = build_text_mapping("木", "き", sample_lookup)

        assert split_text_for_display(mapping, 0) == DisplaySegments(current_char="木")
        assert split_text_for_display(mapping, 1) == DisplaySegments(completed_part="木")

    def test_multi_kana_kanji_stays_highlighted(self, sample_lookup):
        """Test a two-kana kanji is highlighted for both of its kana."""
        mapping = build_text_mapping("花が", "はなが", sample_lookup)

        for position in (0, 1):
            segments = split_text_for_display(mapping, position)
            assert segments.completed_part == ""
            assert segments.current_char == "花"
            assert segments.remaining_part == "が"

        segments = split_text_for_display(mapping, 2)
        assert segments.completed_part == "花"
        assert segments.current_char == "が"
        assert segments.remaining_part == ""

    def test_finished_input(self, sample_lookup):
        """Test the whole text is completed once input is finished."""
        mapping = build_text_mapping("花が", "はなが", sample_lookup)

        segments = split_text_for_display(mapping, 3)

        assert segments.completed_part == "花が"
        assert segments.current_char == ""
        assert segments.remaining_part == ""

    def test_compound_highlights_each_kanji(self, sample_lookup):
        """Test each kanji of a compound is highlighted in turn."""
        mapping = build_text_mapping("大学生", "だいがくせい", sample_lookup)

        currents = [split_text_for_display(mapping, p).current_char for p in range(6)]

        assert currents == ["大", "大", "学", "学", "生", "生"]
        assert split_text_for_display(mapping, 2).completed_part == "大"

    def test_kana_text(self, sample_lookup):
        """Test plain kana advance one character at a time."""
        mapping = build_text_mapping("かな", "かな", sample_lookup)

        segments = split_text_for_display(mapping, 1)

        assert segments == DisplaySegments(completed_part="か", current_char="な")

    @pytest.mark.parametrize(
        ("display_text", "input_text"),
        [
            ("大学生です", "だいがくせいです"),
            ("日本の花", "にほんのはな"),
            ("東京へ食べる", "とうきょうへたべる"),
        ],
    )
    def test_segments_partition_display_text(self, sample_lookup, display_text, input_text):
        """Test the three parts reconstruct the display text at every position."""
        mapping = build_text_mapping(display_text, input_text, sample_lookup)

        for position in range(mapping.total_input_length):
            segments = split_text_for_display(mapping, position)
            assert segments.current_char != ""
            assert segments.join() == display_text
            assert (
                len(segments.completed_part)
                + len(segments.current_char)
                + len(segments.remaining_part)
                == len(display_text)
            )
