"""
Unit tests for configuration parsing and validation.
"""
from specpaste.config import Config


class TestValidate:
    """Tests for Config.validate."""

    def test_defaults_are_valid(self, monkeypatch):
        monkeypatch.setattr(Config, "CROWD_ALIAS_URL", None)
        monkeypatch.setattr(Config, "FETCH_PROXY_URL", None)
        monkeypatch.setattr(Config, "CROWD_ALIAS_MIN_USAGE", 3)
        monkeypatch.setattr(Config, "FETCH_TIMEOUT_S", 10)
        assert Config.validate() == []
        assert Config.is_valid()

    def test_alias_url_needs_key(self, monkeypatch):
        """Should require an API key when the alias store is configured."""
        monkeypatch.setattr(Config, "CROWD_ALIAS_URL", "https://db.example.com/rest/v1")
        monkeypatch.setattr(Config, "CROWD_ALIAS_API_KEY", None)
        errors = Config.validate()
        assert any("CROWD_ALIAS_API_KEY" in e for e in errors)

    def test_bad_numbers(self, monkeypatch):
        monkeypatch.setattr(Config, "CROWD_ALIAS_MIN_USAGE", 0)
        monkeypatch.setattr(Config, "FETCH_TIMEOUT_S", 0)
        errors = Config.validate()
        assert any("CROWD_ALIAS_MIN_USAGE" in e for e in errors)
        assert any("FETCH_TIMEOUT_S" in e for e in errors)

    def test_bad_proxy_url(self, monkeypatch):
        monkeypatch.setattr(Config, "FETCH_PROXY_URL", "proxy.local")
        assert any("FETCH_PROXY_URL" in e for e in Config.validate())


class TestListSettings:
    """Tests for comma-separated settings."""

    def test_cors_origins(self, monkeypatch):
        monkeypatch.setattr(Config, "CORS_ORIGINS", "https://a.example, https://b.example ,")
        assert Config.get_cors_origins() == ["https://a.example", "https://b.example"]

    def test_cors_default(self, monkeypatch):
        monkeypatch.setattr(Config, "CORS_ORIGINS", "")
        assert Config.get_cors_origins() == ["*"]

    def test_allowed_domains(self, monkeypatch):
        monkeypatch.setattr(Config, "FETCH_ALLOWED_DOMAINS", "BHPhotoVideo.com, adorama.com")
        assert Config.get_allowed_domains() == ["bhphotovideo.com", "adorama.com"]

    def test_allowed_domains_empty(self, monkeypatch):
        monkeypatch.setattr(Config, "FETCH_ALLOWED_DOMAINS", "")
        assert Config.get_allowed_domains() == []

    def test_summary_hides_secrets(self, monkeypatch):
        monkeypatch.setattr(Config, "CROWD_ALIAS_API_KEY", "secret-key")
        summary = Config.get_summary()
        assert "secret-key" not in str(summary)
        assert "crowd_aliases_configured" in summary
