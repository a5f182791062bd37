"""Tests for daybook/config.py"""

from pathlib import Path

import pytest

from daybook.config import Config, LocalizationConfig
from daybook.errors import InvalidArgumentError


class TestDefaults:

    def test_empty_data(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        config = Config.from_dict({})

        assert config.state_file == tmp_path / "daybook" / "calendars.json"
        assert config.default_calendar == "Default"
        assert config.on_load_error == "fail"
        assert config.layout.hour_subdivisions == 4
        assert config.calendar.week_start == 6

    def test_missing_default_file_gives_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        config = Config.load()

        assert config.default_calendar == "Default"
        assert Config.get_default_config_path() == tmp_path / "daybook" / "daybook.toml"

    def test_missing_explicit_file_fails(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "nope.toml")


class TestFromDict:

    def test_all_sections(self):
        config = Config.from_dict({
            "General": {
                "state_file": "/tmp/cals.json",
                "default_calendar": "Home",
                "on_load_error": "reset",
            },
            "Layout": {"hour_subdivisions": 2},
            "Calendar": {"week_start": "Monday"},
            "Localization": {"day_names": "Mo Di Mi Do Fr Sa So"},
        })

        assert config.state_file == Path("/tmp/cals.json")
        assert config.default_calendar == "Home"
        assert config.on_load_error == "reset"
        assert config.layout.hour_subdivisions == 2
        assert config.calendar.week_start == 0
        assert config.localization.day_name(6) == "So"

    def test_state_file_expands_user(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))

        config = Config.from_dict({"General": {"state_file": "~/cals.json"}})

        assert config.state_file == tmp_path / "cals.json"

    @pytest.mark.parametrize("data", [
        {"General": {"on_load_error": "ignore"}},
        {"General": {"default_calendar": 5}},
        {"Layout": {"hour_subdivisions": 0}},
        {"Layout": {"hour_subdivisions": "4"}},
        {"Layout": {"hour_subdivisions": True}},
        {"Calendar": {"week_start": "someday"}},
        {"Localization": {"day_names": "Mo Di Mi"}},
        {"Localization": {"month_names": "Jan Feb"}},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(InvalidArgumentError):
            Config.from_dict(data)


class TestLoadFile:

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "daybook.toml"
        path.write_text(
            '[General]\ndefault_calendar = "Main"\n\n[Calendar]\nweek_start = "saturday"\n',
            encoding='utf-8',
        )

        config = Config.load(path)

        assert config.default_calendar == "Main"
        assert config.calendar.week_start == 5

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "daybook.toml"
        path.write_text("[General\n", encoding='utf-8')

        with pytest.raises(ValueError):
            Config.load(path)


class TestLocalization:

    def test_english_defaults(self):
        localization = LocalizationConfig()

        assert localization.day_name(0) == "Mon"
        assert localization.month_name(12) == "December"

    def test_out_of_range(self):
        localization = LocalizationConfig()

        assert localization.day_name(7) == ""
        assert localization.month_name(0) == ""
