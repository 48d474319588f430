"""Integration tests for TypingEngine."""

import json

import pytest
from pydantic import ValidationError

from kana_typing import TypingEngine
from kana_typing.services.base import ReadingLookup
from kana_typing.types import KeystrokeOutcome, Progress


class FixedLookup(ReadingLookup):
    """Reading lookup that is not dictionary based."""

    def reading_of(self, display_unit):
        return None

    def is_kanji(self, char):
        return False


class TestTypingEngine:
    """Test TypingEngine integration."""

    def test_initialization(self):
        """Test engine initialization without packaged data."""
        engine = TypingEngine(load_default_readings=False)
        assert engine is not None
        assert len(engine.lookup) == 0

    def test_default_readings_loaded(self, monkeypatch):
        """Test packaged readings are loaded when not skipped."""
        monkeypatch.delenv("KANA_TYPING_SKIP_DEFAULT_READINGS", raising=False)

        engine = TypingEngine()

        assert engine.lookup.has_reading("大学生")
        assert "こんにち" in engine.generator.alternate_readings_of("今日")

    def test_env_var_skips_default_readings(self, monkeypatch):
        """Test the environment variable disables packaged readings."""
        monkeypatch.setenv("KANA_TYPING_SKIP_DEFAULT_READINGS", "1")

        engine = TypingEngine()

        assert not engine.lookup.has_reading("大学生")

    def test_end_to_end_single_kanji(self, engine):
        """Test typing 木 completes the session in one keystroke."""
        mapping = engine.align("木", "き")

        result = engine.validate(mapping, "き", 0)
        assert result.is_complete is True
        assert engine.judge(mapping, "き", 0) == KeystrokeOutcome.COMPLETE

        position = 1
        assert position == mapping.total_input_length
        assert engine.progress(mapping, position).finished is True
        assert engine.segment(mapping, position).completed_part == "木"
        assert engine.target_char(mapping, position) == ""

    def test_typing_session(self, engine):
        """Test a full session typed kana by kana reaches the end."""
        mapping = engine.align_with_variants("大学生です", "だいがくせいです")
        position = 0
        for kana in mapping.input_text:
            assert engine.judge(mapping, kana, position) == KeystrokeOutcome.COMPLETE
            position += 1

        assert engine.progress(mapping, position).finished is True

    def test_judge_pending_and_mistake(self, engine):
        """Test intermediate steps are pending and unrelated input is a mistake."""
        mapping = engine.align("ぱん", "ぱん")

        assert engine.judge(mapping, "は", 0) == KeystrokeOutcome.PENDING
        assert engine.judge(mapping, "ば", 0) == KeystrokeOutcome.PENDING
        assert engine.judge(mapping, "ぱ", 0) == KeystrokeOutcome.COMPLETE
        assert engine.judge(mapping, "か", 0) == KeystrokeOutcome.MISTAKE
        assert engine.judge(mapping, "", 0) == KeystrokeOutcome.PENDING

    def test_validate_uses_alternate_readings(self, engine):
        """Test the engine passes its generator to validation."""
        mapping = engine.align("月", "つき")

        result = engine.validate(mapping, "が", 0)

        assert result.is_valid is True

    def test_compound_length_configuration(self, sample_lookup):
        """Test max_compound_length changes compound matching."""
        engine = TypingEngine(
            lookup=sample_lookup, max_compound_length=2, load_default_readings=False
        )

        mapping = engine.align("大学生", "だいがくせい")

        assert mapping[0].kanji_word == "大学"

    @pytest.mark.parametrize("length", [0, 1, 33])
    def test_invalid_compound_length(self, length):
        """Test out-of-range max_compound_length raises ValidationError."""
        with pytest.raises(ValidationError):
            TypingEngine(max_compound_length=length, load_default_readings=False)

    def test_negative_position_raises(self, engine):
        """Test a negative input position raises ValidationError."""
        mapping = engine.align("木", "き")

        with pytest.raises(ValidationError, match="greater than or equal to 0"):
            engine.validate(mapping, "き", -1)

        with pytest.raises(ValidationError):
            engine.segment(mapping, -1)

    def test_observer_receives_events(self, sample_lookup):
        """Test the engine forwards its observer."""
        events = []
        engine = TypingEngine(
            lookup=sample_lookup,
            load_default_readings=False,
            observer=lambda event, payload: events.append(event),
        )

        mapping = engine.align("大学生", "だいがくせい")
        engine.validate(mapping, "だ", 0)

        assert "compound_match" in events
        assert events[-1] == "result"


class TestReadingData:
    """Test adding and loading reading data through the engine."""

    def test_add_readings(self):
        """Test readings added through the engine are used for alignment."""
        engine = TypingEngine(load_default_readings=False)
        engine.add_readings({"雨": "あめ"})

        mapping = engine.align("雨", "あめ")

        assert [m.display_index for m in mapping.mappings] == [0, 0]

    def test_add_alternates(self):
        """Test alternates added through the engine are accepted."""
        engine = TypingEngine(load_default_readings=False)
        engine.add_readings({"生": "せい"})
        engine.add_alternates({"生": ["しょう"]})

        mapping = engine.align("生", "せい")

        assert "し" in engine.validate(mapping, "", 0).possible_chars

    def test_add_readings_requires_dict_lookup(self):
        """Test add_readings raises TypeError for other lookups."""
        engine = TypingEngine(lookup=FixedLookup(), load_default_readings=False)

        with pytest.raises(TypeError):
            engine.add_readings({"雨": "あめ"})

    def test_load_readings(self, tmp_path):
        """Test loading readings and alternates from a JSON file."""
        data_file = tmp_path / "readings.json"
        data_file.write_text(
            json.dumps(
                {"readings": {"一日": "いちにち"}, "alternates": {"一日": ["ついたち"]}},
                ensure_ascii=False,
            ),
            encoding="utf-8",
        )
        engine = TypingEngine(load_default_readings=False)

        engine.load_readings(data_file)
        mapping = engine.align_with_variants("一日", "いちにち")

        assert mapping[0].reading_variations == ("つ",)

    def test_load_readings_file_not_found(self):
        """Test load_readings raises FileNotFoundError for a missing file."""
        engine = TypingEngine(load_default_readings=False)

        with pytest.raises(FileNotFoundError, match="Reading data not found"):
            engine.load_readings("nonexistent_readings.json")


class TestProgress:
    """Test progress reporting."""

    def test_progress_rounds_percent(self, engine):
        """Test percentages are rounded half up."""
        mapping = engine.align("あいう", "あいう")

        assert engine.progress(mapping, 0) == Progress(
            position=0, total=3, percent=0, finished=False
        )
        assert engine.progress(mapping, 1).percent == 33
        assert engine.progress(mapping, 2).percent == 67
        assert engine.progress(mapping, 3).percent == 100

    def test_progress_clamps_position(self, engine):
        """Test positions outside the text are clamped."""
        mapping = engine.align("あいう", "あいう")

        assert engine.progress(mapping, 10).position == 3
        assert engine.progress(mapping, -2).position == 0

    def test_progress_empty_text(self, engine):
        """Test an empty text is finished immediately."""
        mapping = engine.align("", "")

        progress = engine.progress(mapping, 0)

        assert progress.percent == 0
        assert progress.finished is True
