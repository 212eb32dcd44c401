from __future__ import annotations

import pytest

from theme_client.file_filter import NullFileFilter, PatternFileFilter


def test_null_filter_matches_nothing():
    assert NullFileFilter().match("config.yml") is False


def test_glob_patterns_match_key_and_trailing_paths():
    file_filter = PatternFileFilter(["*.swp", "settings_data.json"])

    assert file_filter.match("templates/index.liquid.swp")
    assert file_filter.match("config/settings_data.json")
    assert not file_filter.match("config/settings_schema.json")


def test_regex_patterns_are_searched():
    file_filter = PatternFileFilter([r"/\.min\.(js|css)$/"])

    assert file_filter.match("assets/vendor.min.js")
    assert not file_filter.match("assets/vendor.js")


def test_invalid_regex_is_rejected():
    with pytest.raises(ValueError, match="Invalid ignore pattern"):
        PatternFileFilter(["/([a-z/"])


def test_from_config_reads_ignore_files_and_defaults(tmp_path):
    (tmp_path / "ignores.txt").write_text("# comment\n\nsnippets/draft-*\n", encoding="utf-8")

    file_filter = PatternFileFilter.from_config(
        directory=tmp_path,
        patterns=["locales/*.json"],
        ignore_files=["ignores.txt"],
    )

    assert file_filter.match("snippets/draft-hero.liquid")
    assert file_filter.match("locales/en.default.json")
    assert file_filter.match("config.yml")
    assert not file_filter.match("snippets/hero.liquid")


def test_from_config_raises_for_missing_ignore_file(tmp_path):
    with pytest.raises(ValueError, match="Could not read ignore file"):
        PatternFileFilter.from_config(directory=tmp_path, ignore_files=["missing.txt"])
