"""Tests for the settings models and loader."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from animapper.config.loader import SettingsLoader, load_settings
from animapper.config.models.app_settings import ServerSettings
from animapper.config.models.matching_weights import MatchingWeights
from animapper.config.models.settings import Settings
from animapper.shared.errors import ApplicationError, ErrorCode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep deployment variables of the host out of these tests."""
    for name in ("PORT", "ANIMAPPER_SERVER__PORT", "ANIMAPPER_MATCHING__ACCEPTANCE_THRESHOLD"):
        monkeypatch.delenv(name, raising=False)


class TestMatchingWeights:
    """Tests for MatchingWeights validation."""

    def test_defaults(self) -> None:
        weights = MatchingWeights()

        assert weights.word_match_weight == 0.7
        assert weights.string_similarity_weight == 0.3
        assert weights.partial_match_factor == 0.5
        assert weights.early_exit_threshold == 0.8
        assert weights.acceptance_threshold == 0.4

    def test_blend_weights_must_sum_to_one(self) -> None:
        with pytest.raises(ValidationError, match="sum to 1.0"):
            MatchingWeights(word_match_weight=0.6, string_similarity_weight=0.3)

    def test_acceptance_cannot_exceed_early_exit(self) -> None:
        with pytest.raises(ValidationError, match="must not exceed"):
            MatchingWeights(acceptance_threshold=0.9, early_exit_threshold=0.8)

    @pytest.mark.parametrize("value", [-0.1, 1.5])
    def test_values_are_bounded(self, value: float) -> None:
        with pytest.raises(ValidationError):
            MatchingWeights(partial_match_factor=value)


class TestSettings:
    """Tests for Settings sources."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 3000
        assert settings.api.anilist_url == "https://graphql.anilist.co"
        assert settings.api.anizip_url == "https://api.ani.zip/mappings"
        assert settings.matching == MatchingWeights()

    def test_nested_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANIMAPPER_MATCHING__ACCEPTANCE_THRESHOLD", "0.5")

        assert Settings().matching.acceptance_threshold == 0.5

    def test_bare_port_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Hosting platforms set PORT without a prefix."""
        monkeypatch.setenv("PORT", "8080")

        assert ServerSettings().port == 8080
        assert Settings().server.port == 8080

    def test_toml_round_trip(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config" / "animapper.toml"
        original = Settings(matching=MatchingWeights(acceptance_threshold=0.45))

        original.to_toml_file(config_file)
        loaded = Settings.from_toml_file(config_file)

        assert loaded.matching.acceptance_threshold == 0.45
        assert loaded.server.port == original.server.port
        assert loaded.api == original.api


class TestLoader:
    """Tests for load_settings() and SettingsLoader."""

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.toml")

    def test_invalid_values_raise_config_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.toml"
        config_file.write_text("[matching]\nacceptance_threshold = 2.0\n", encoding="utf-8")

        with pytest.raises(ApplicationError) as exc_info:
            load_settings(config_file)

        assert exc_info.value.code == ErrorCode.CONFIG_ERROR

    def test_loader_caches_instance(self) -> None:
        loader = SettingsLoader()

        assert loader.get_config() is loader.get_config()

    def test_reload_reads_new_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "animapper.toml"
        config_file.write_text("[server]\nport = 4000\n", encoding="utf-8")
        loader = SettingsLoader()
        first = loader.get_config()

        reloaded = loader.reload_config(config_file)

        assert reloaded is not first
        assert reloaded.server.port == 4000
        assert loader.get_config() is reloaded

    def test_failed_reload_keeps_previous_path(self, tmp_path: Path) -> None:
        """A bad path does not poison later reloads."""
        loader = SettingsLoader()

        with pytest.raises(FileNotFoundError):
            loader.reload_config(tmp_path / "missing.toml")

        assert loader.reload_config().server.port == 3000
