"""Pytest configuration and shared fixtures."""

import os

import pytest

from kana_typing import TypingEngine
from kana_typing.services.dictionary import DictReadingLookup
from kana_typing.services.variations import DictVariationGenerator

SAMPLE_READINGS = {
    "木": "き",
    "花": "はな",
    "月": "つき",
    "大": "だい",
    "学": "がく",
    "生": "せい",
    "大学": "だいがく",
    "大学生": "だいがくせい",
    "一": "いち",
    "一日": "いちにち",
    "今日": "きょう",
    "食": "た",
    "食べる": "たべる",
    "大人": "おとな",
    "東": "とう",
    "京": "きょう",
    "東京": "とうきょう",
    "本": "ほん",
    "日本": "にほん",
}

SAMPLE_ALTERNATES = {
    "一日": ["ついたち"],
    "今日": ["こんにち"],
    "月": ["げつ", "がつ"],
}


def pytest_configure(config):
    """Configure pytest to skip packaged reading data unless a test opts in."""
    os.environ["KANA_TYPING_SKIP_DEFAULT_READINGS"] = "1"


@pytest.fixture
def sample_lookup():
    """
    Create a reading lookup with a small set of kanji readings.

    Returns:
        DictReadingLookup: A lookup with SAMPLE_READINGS registered
    """
    return DictReadingLookup(SAMPLE_READINGS)


@pytest.fixture
def sample_generator(sample_lookup):
    """
    Create a variation generator sharing the sample lookup.

    Returns:
        DictVariationGenerator: A generator with SAMPLE_ALTERNATES registered
    """
    return DictVariationGenerator(lookup=sample_lookup, alternates=SAMPLE_ALTERNATES)


@pytest.fixture
def engine(sample_lookup, sample_generator):
    """
    Create an engine over the sample reading data.

    Returns:
        TypingEngine: An engine that does not load packaged data
    """
    return TypingEngine(
        lookup=sample_lookup, generator=sample_generator, load_default_readings=False
    )
