import pydantic
import pytest

from studyassist.config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PARSER_MAX_ATTEMPTS", raising=False)
        monkeypatch.delenv("CONTENT_MAX_CHARS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.parser_max_attempts == 2
        assert settings.parser_retry_delay_seconds == 0.8
        assert settings.content_max_chars == 50_000
        assert settings.history_window == 10

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMPLETION_PROVIDER", "example")
        monkeypatch.setenv("PARSER_MAX_ATTEMPTS", "3")
        settings = Settings(_env_file=None)
        assert settings.completion_provider == "example"
        assert settings.parser_max_attempts == 3

    def test_invalid_value_fails_validation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HTTP_PORT", "not-a-port")
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None)

    def test_is_immutable(self) -> None:
        settings = Settings(_env_file=None)
        with pytest.raises(pydantic.ValidationError):
            settings.log_level = "DEBUG"  # type: ignore[misc]
