"""Tests for configuration helpers."""

import pytest

from srt_generator import config


class TestValidateCharLimit:

    @pytest.mark.parametrize("value", [10, 30, 200])
    def test_in_range(self, value):
        assert config.validate_char_limit(value) == value

    @pytest.mark.parametrize("value", [9, 0, -5, 201])
    def test_out_of_range(self, value):
        with pytest.raises(ValueError, match="between 10 and 200"):
            config.validate_char_limit(value)


class TestLoadApiKey:

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ELEVENLABS_API_KEY", "  secret  ")
        assert config.load_api_key() == "secret"

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ELEVENLABS_API_KEY"):
            config.load_api_key()


def test_gap_threshold_matches_engine():
    from srt_generator.core import GAP_THRESHOLD_S

    assert config.GAP_THRESHOLD_S == GAP_THRESHOLD_S == 2.0


def test_supported_formats_are_lowercase_with_dot():
    assert config.SUPPORTED_FORMATS
    for ext in config.SUPPORTED_FORMATS:
        assert ext.startswith(".")
        assert ext == ext.lower()
