#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for settings file loading."""

import json

import pytest

from html2anf.config import load_settings_file, parse_setting_overrides
from html2anf.exceptions import ConfigFileError


@pytest.mark.unit
class TestLoadSettingsFile:
    """Tests for load_settings_file."""

    def test_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"layout_columns": 9}), encoding="utf-8")

        assert load_settings_file(path) == {"layout_columns": 9}

    def test_toml(self, tmp_path):
        path = tmp_path / "settings.toml"
        path.write_text('layout_columns = 9\ncaption_font = "Georgia"\n', encoding="utf-8")

        assert load_settings_file(str(path)) == {"layout_columns": 9, "caption_font": "Georgia"}

    def test_toml_section(self, tmp_path):
        path = tmp_path / "project.toml"
        path.write_text('[html2anf]\nfull_bleed_images = "yes"\n\n[other]\nx = 1\n', encoding="utf-8")

        assert load_settings_file(path) == {"full_bleed_images": "yes"}

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_yaml(self, tmp_path, suffix):
        path = tmp_path / f"settings{suffix}"
        path.write_text("caption_size: 14\nbody_orientation: right\n", encoding="utf-8")

        assert load_settings_file(path) == {"caption_size": 14, "body_orientation": "right"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileError, match="does not exist"):
            load_settings_file(tmp_path / "missing.json")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "settings.ini"
        path.write_text("[x]\n", encoding="utf-8")

        with pytest.raises(ConfigFileError, match="Unsupported"):
            load_settings_file(path)

    @pytest.mark.parametrize(
        "name,content",
        [
            ("bad.json", "{not json"),
            ("bad.toml", "layout_columns = = 3"),
            ("bad.yaml", "a: [unclosed"),
        ],
    )
    def test_malformed(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigFileError) as exc_info:
            load_settings_file(path)

        assert exc_info.value.original_error is not None
        assert exc_info.value.file_path == str(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigFileError, match="mapping"):
            load_settings_file(path)


@pytest.mark.unit
class TestParseSettingOverrides:
    """Tests for KEY=VALUE parsing."""

    def test_pairs(self):
        assert parse_setting_overrides(["layout_columns=9", " caption_font = Georgia Bold "]) == {
            "layout_columns": "9",
            "caption_font": "Georgia Bold",
        }

    def test_value_may_contain_equals(self):
        assert parse_setting_overrides(["caption_color=a=b"]) == {"caption_color": "a=b"}

    @pytest.mark.parametrize("pair", ["layout_columns", "=9"])
    def test_invalid(self, pair):
        with pytest.raises(ConfigFileError):
            parse_setting_overrides([pair])
