"""
Unit tests for config.py
"""
from config import KNOWN_PROVIDERS, Settings


class TestSettingsFromEnv:
    def test_defaults(self, monkeypatch):
        for name in ("OPENROUTER_API_KEY", "OPENAI_API_KEY", "PROVIDER_ORDER",
                     "ENABLE_ENRICHMENT", "RANDOM_SEED", "PROVIDER_TIMEOUT_SECONDS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.provider_order == KNOWN_PROVIDERS
        assert settings.provider_timeout_seconds == 60.0
        assert settings.enable_enrichment is True
        assert settings.random_seed is None

    def test_provider_order_parsed(self, monkeypatch):
        monkeypatch.setenv("PROVIDER_ORDER", " OpenAI , bogus, openai,openrouter")
        assert Settings.from_env().provider_order == ("openai", "openrouter")

    def test_flags_and_numbers(self, monkeypatch):
        monkeypatch.setenv("ENABLE_ENRICHMENT", "no")
        monkeypatch.setenv("RANDOM_SEED", "42")
        monkeypatch.setenv("PLAN_TIMEOUT_SECONDS", "15")
        settings = Settings.from_env()
        assert settings.enable_enrichment is False
        assert settings.random_seed == 42
        assert settings.plan_timeout_seconds == 15.0
