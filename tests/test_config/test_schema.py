"""Tests for settings models."""

from desmos_graph.config.schema import CacheLocation, CacheSettings, Settings


class TestCacheSettings:
    def test_defaults(self):
        settings = CacheSettings()
        assert settings.enabled is True
        assert settings.location == CacheLocation.MEMORY
        assert settings.directory is None

    def test_location_case_insensitive(self):
        assert CacheSettings(location="FILESYSTEM").location == CacheLocation.FILESYSTEM

    def test_blank_directory_is_unset(self):
        assert CacheSettings(directory="   ").directory is None


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.debounce == 500
        assert settings.origin == "app://obsidian.md"
        assert settings.cache == CacheSettings()

    def test_negative_debounce_falls_back(self):
        assert Settings(debounce=-1).debounce == 500

    def test_unparseable_debounce_falls_back(self):
        assert Settings(debounce="abc").debounce == 500
        assert Settings(debounce=None).debounce == 500

    def test_zero_debounce_allowed(self):
        assert Settings(debounce=0).debounce == 0

    def test_numeric_string_debounce(self):
        assert Settings(debounce="750").debounce == 750
