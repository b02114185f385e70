"""Tests for configuration loading."""

import json

import pytest
import yaml

from sendgrid_kit.base import EU_BASE_URL
from sendgrid_kit.client import SendGridClient
from sendgrid_kit.config import SendGridSettings, load_settings
from sendgrid_kit.exceptions import ConfigurationError
from sendgrid_kit.transport import RequestsTransport


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self, tmp_path):
        """Test loading with no config sources."""
        settings = load_settings(config_dir=tmp_path)

        assert settings.api_key is None
        assert settings.for_eu is False
        assert settings.timeouts.metadata == 30.0
        assert settings.timeouts.listing == 60.0
        assert settings.timeouts.upload == 180.0
        assert settings.max_response_bytes == 1024 * 1024

    def test_yaml_config_file(self, tmp_path):
        """Test loading a YAML file with a sendgrid section."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({
            "sendgrid": {
                "api_key": "SG.file-key",
                "for_eu": True,
                "timeouts": {"upload": 300},
                "logging": {"level": "WARNING"},
            }
        }))

        settings = load_settings(config_dir=tmp_path)

        assert settings.api_key == "SG.file-key"
        assert settings.for_eu is True
        assert settings.timeouts.upload == 300
        assert settings.timeouts.metadata == 30.0
        assert settings.logging.level == "WARNING"

    def test_json_config_file(self, tmp_path):
        """Test loading a flat JSON file."""
        config_file = tmp_path / "settings.json"
        config_file.write_text(json.dumps({"validation_api_key": "SG.json-key"}))

        settings = load_settings(config_file=str(config_file))

        assert settings.validation_api_key == "SG.json-key"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test that environment variables win over file values."""
        (tmp_path / "config.yaml").write_text(yaml.dump({"api_key": "SG.file-key"}))
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.env-key")
        monkeypatch.setenv("SENDGRID_TIMEOUTS__LISTING", "90")

        settings = load_settings(config_dir=tmp_path)

        assert settings.api_key == "SG.env-key"
        assert settings.timeouts.listing == 90

    def test_env_file(self, tmp_path, monkeypatch):
        """Test that values from a .env file are loaded."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("SENDGRID_VALIDATION_API_KEY=SG.dotenv-key\n")
        monkeypatch.delenv("SENDGRID_VALIDATION_API_KEY", raising=False)

        settings = load_settings(config_dir=tmp_path, env_file=str(env_file))

        assert settings.validation_api_key == "SG.dotenv-key"

    def test_unsupported_format(self, tmp_path):
        """Test that unknown config file formats are rejected."""
        config_file = tmp_path / "config.ini"
        config_file.write_text("[sendgrid]\n")

        with pytest.raises(ConfigurationError, match="Unsupported config file format"):
            load_settings(config_file=str(config_file))

    def test_non_mapping_file(self, tmp_path):
        """Test that a file without a mapping is rejected."""
        (tmp_path / "config.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_settings(config_dir=tmp_path)

    def test_malformed_yaml(self, tmp_path):
        """Test that unparsable files raise ConfigurationError."""
        (tmp_path / "config.yaml").write_text("api_key: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to read"):
            load_settings(config_dir=tmp_path)

    def test_invalid_value(self, tmp_path):
        """Test that invalid settings raise ConfigurationError."""
        (tmp_path / "config.yaml").write_text(yaml.dump({"timeouts": {"upload": -1}}))

        with pytest.raises(ConfigurationError, match="Failed to load configuration"):
            load_settings(config_dir=tmp_path)


class TestClientFromSettings:
    """Tests for building a client from settings."""

    def test_from_settings(self):
        """Test that settings flow into the client."""
        settings = SendGridSettings(
            api_key="SG.mail-key",
            for_eu=True,
            max_response_bytes=2048,
            timeouts={"upload": 240},
        )

        client = SendGridClient.from_settings(settings)

        assert client.base_url == EU_BASE_URL
        assert isinstance(client.transport, RequestsTransport)
        assert client.transport.max_response_bytes == 2048
        assert client.bulk_validation.timeouts.upload == 240
        assert client.mail.has_credential
        assert not client.validation.has_credential
