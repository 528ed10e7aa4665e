"""
Tests for toolkit configuration
"""
import pytest

from paykit import ConfigurationError, PaykitSettings, PaykitToolkit, PaymanClient, load_settings, paykit


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_to_sandbox(self):
        """Should default the environment to sandbox."""
        settings = load_settings(api_secret="sk_test")
        assert settings.environment == "sandbox"
        assert settings.resolved_base_url == "https://agent-sandbox.payman.ai/api"

    def test_production_url(self):
        """Should resolve the production base URL."""
        settings = load_settings(api_secret="sk_live", environment="production")
        assert settings.resolved_base_url == "https://agent.payman.ai/api"

    def test_base_url_override(self):
        """Should prefer an explicit base URL."""
        settings = load_settings(api_secret="sk_test", base_url="http://localhost:8080/api/")
        assert settings.resolved_base_url == "http://localhost:8080/api"

    def test_strips_secret(self):
        """Should strip surrounding whitespace from the secret."""
        assert load_settings(api_secret="  sk_test \n").api_secret == "sk_test"

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_rejects_empty_secret(self, secret):
        """Should fail fast on an empty secret."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(api_secret=secret)
        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert exc_info.value.errors[0]["field"] == "api_secret"

    def test_rejects_missing_secret(self):
        """Should fail when no secret is given or set in the environment."""
        with pytest.raises(ConfigurationError):
            load_settings()

    def test_rejects_unknown_environment(self):
        """Should reject environments other than production and sandbox."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(api_secret="sk_test", environment="staging")
        assert exc_info.value.errors[0]["field"] == "environment"

    def test_rejects_negative_retries(self):
        """Should reject a negative retry count."""
        with pytest.raises(ConfigurationError):
            load_settings(api_secret="sk_test", max_retries=-1)

    def test_reads_environment_variables(self, monkeypatch):
        """Should pick up PAYMAN_* environment variables."""
        monkeypatch.setenv("PAYMAN_API_SECRET", "sk_from_env")
        monkeypatch.setenv("PAYMAN_ENVIRONMENT", "production")
        settings = load_settings()
        assert settings.api_secret == "sk_from_env"
        assert settings.environment == "production"

    def test_arguments_override_environment(self, monkeypatch):
        """Should let explicit arguments win over the environment."""
        monkeypatch.setenv("PAYMAN_API_SECRET", "sk_from_env")
        assert load_settings(api_secret="sk_explicit").api_secret == "sk_explicit"

    def test_settings_are_frozen(self):
        """Should not allow mutation after construction."""
        settings = PaykitSettings(api_secret="sk_test")
        with pytest.raises(Exception):
            settings.api_secret = "other"


class TestFactoryConfiguration:
    """Tests for configuration handling in the toolkit factory."""

    def test_empty_secret_returns_no_tools(self):
        """Should raise instead of returning a toolkit."""
        with pytest.raises(ConfigurationError):
            paykit(api_secret="")

    def test_builds_default_client(self):
        """Should build a PaymanClient bound to the environment."""
        tools = paykit(api_secret="sk_test", environment="production")
        assert isinstance(tools.client, PaymanClient)
        assert tools.client.environment == "production"
        assert tools.client.base_url == "https://agent.payman.ai/api"

    def test_no_network_at_construction(self):
        """Should not open a connection until the first tool call."""
        tools = paykit(api_secret="sk_test")
        assert tools.client.is_connected is False

    def test_from_env(self, monkeypatch):
        """Should build from PAYMAN_API_SECRET."""
        monkeypatch.setenv("PAYMAN_API_SECRET", "sk_from_env")
        toolkit = PaykitToolkit.from_env()
        assert toolkit.settings.api_secret == "sk_from_env"
        assert toolkit.settings.environment == "sandbox"

    def test_from_env_without_secret(self):
        """Should raise a configuration error when the secret is absent."""
        with pytest.raises(ConfigurationError):
            PaykitToolkit.from_env()

    def test_client_settings_forwarded(self):
        """Should pass timeout and base URL through to the client."""
        tools = paykit(api_secret="sk_test", base_url="http://localhost:9000", timeout=5)
        assert tools.client.base_url == "http://localhost:9000"
        assert tools.settings.timeout == 5
