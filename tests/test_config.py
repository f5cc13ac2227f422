"""
Tests for configuration loading.
"""

import pytest

from browser_task_agent.config import API_KEY_ENV_VAR, AgentConfig
from browser_task_agent.exceptions import ConfigurationError


class TestAgentConfig:
    """Tests for AgentConfig defaults and credential handling."""

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV_VAR, "sk-env")

        config = AgentConfig()

        assert config.api_key == "sk-env"
        assert config.model == "gpt-4-turbo-preview"
        assert config.temperature == 0.7
        assert config.max_iterations == 20
        assert config.headless is True
        assert config.navigation_timeout == 30000
        assert config.action_timeout == 10000
        assert config.html_max_chars == 5000
        assert config.text_max_chars == 3000

    def test_from_env_with_key(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV_VAR, "sk-env")

        config = AgentConfig.from_env(debug=True)

        assert config.api_key == "sk-env"
        assert config.debug is True

    def test_from_env_without_key(self, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)

        with pytest.raises(ConfigurationError, match=API_KEY_ENV_VAR):
            AgentConfig.from_env()

    def test_empty_key_is_missing(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV_VAR, "")

        with pytest.raises(ConfigurationError):
            AgentConfig().require_api_key()

    def test_explicit_key(self, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)

        assert AgentConfig(api_key="sk-test").require_api_key() == "sk-test"
