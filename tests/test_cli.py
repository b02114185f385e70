"""Tests for the command line interface."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sendgrid_kit import __version__
from sendgrid_kit.cli import main
from sendgrid_kit.client import SendGridClient


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def cli_transport(monkeypatch, transport):
    """Route CLI clients through a fake transport with both credentials."""
    monkeypatch.setenv("SENDGRID_API_KEY", "SG.mail-key")
    monkeypatch.setenv("SENDGRID_VALIDATION_API_KEY", "SG.validation-key")

    def build_client(settings):
        return SendGridClient.from_settings(settings, transport=transport)

    with patch("sendgrid_kit.cli._build_client", side_effect=build_client):
        yield transport


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every command from an empty directory."""
    monkeypatch.chdir(tmp_path)


class TestCli:
    """Tests for top-level commands."""

    def test_version(self, runner):
        """Test the version command."""
        result = runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_status(self, runner, monkeypatch):
        """Test that status reports credentials without revealing them."""
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.secret")

        result = runner.invoke(main, ["status"])

        assert result.exit_code == 0
        assert "configured" in result.output
        assert "missing" in result.output
        assert "SG.secret" not in result.output

    def test_send(self, runner, cli_transport):
        """Test sending an email."""
        cli_transport.queue(202, headers={"X-Message-Id": "msg-9"})

        result = runner.invoke(main, [
            "send",
            "--to", "bob@example.com",
            "--from", "alice@example.com",
            "--subject", "Hi",
            "--text", "Hello Bob",
        ])

        assert result.exit_code == 0, result.output
        assert "msg-9" in result.output
        body = cli_transport.json_body()
        assert body["from"] == {"email": "alice@example.com"}
        assert body["personalizations"][0]["to"] == [{"email": "bob@example.com"}]

    def test_send_sandbox_with_template(self, runner, cli_transport):
        """Test sending a template in sandbox mode."""
        cli_transport.queue(200)

        result = runner.invoke(main, [
            "send",
            "--to", "bob@example.com",
            "--from", "alice@example.com",
            "--template-id", "d-123",
            "--data", '{"name": "Bob"}',
            "--sandbox",
        ])

        assert result.exit_code == 0, result.output
        body = cli_transport.json_body()
        assert body["template_id"] == "d-123"
        assert body["personalizations"][0]["dynamic_template_data"] == {"name": "Bob"}
        assert body["mail_settings"] == {"sandbox_mode": {"enable": True}}

    def test_send_requires_body(self, runner, cli_transport):
        """Test that send needs content or a template."""
        result = runner.invoke(main, ["send", "--to", "bob@example.com", "--from", "alice@example.com"])

        assert result.exit_code != 0
        assert cli_transport.requests == []

    def test_send_invalid_address(self, runner, cli_transport):
        """Test that malformed addresses are rejected locally."""
        result = runner.invoke(main, [
            "send", "--to", "not-an-address", "--from", "alice@example.com", "--text", "x",
        ])

        assert result.exit_code == 1
        assert "ValidationError" in result.output
        assert cli_transport.requests == []

    def test_send_provider_error(self, runner, cli_transport):
        """Test that provider errors print the chain and exit 1."""
        cli_transport.queue(400, {"errors": [{"message": "bad from", "field": "from"}]})

        result = runner.invoke(main, [
            "send", "--to", "bob@example.com", "--from", "alice@example.com", "--text", "x",
        ])

        assert result.exit_code == 1
        assert "ProviderError" in result.output
        assert "bad from" in result.output

    def test_send_missing_credential(self, runner):
        """Test that a missing key is reported."""
        result = runner.invoke(main, [
            "send", "--to", "bob@example.com", "--from", "alice@example.com", "--text", "x",
        ])

        assert result.exit_code == 1
        assert "ConfigurationError" in result.output

    def test_validate(self, runner, cli_transport, validation_result_payload):
        """Test validating an address."""
        cli_transport.queue(200, validation_result_payload)

        result = runner.invoke(main, ["validate", "alice@example.com", "--source", "signup"])

        assert result.exit_code == 0, result.output
        assert "valid" in result.output
        assert cli_transport.json_body() == {"email": "alice@example.com", "source": "signup"}


class TestBulkCli:
    """Tests for bulk validation commands."""

    def test_upload(self, runner, cli_transport, upload_slot_payload, tmp_path):
        """Test uploading a CSV file."""
        csv_file = tmp_path / "addresses.csv"
        csv_file.write_bytes(b"emails\nbob@example.com\n")
        cli_transport.queue(200, upload_slot_payload).queue(200)

        result = runner.invoke(main, ["bulk", "upload", str(csv_file)])

        assert result.exit_code == 0, result.output
        assert "J1" in result.output
        assert cli_transport.json_body(0) == {"file_type": "csv"}
        assert cli_transport.requests[1].body == b"emails\nbob@example.com\n"

    def test_upload_unknown_extension(self, runner, cli_transport, tmp_path):
        """Test that the file type must be inferable or given."""
        data_file = tmp_path / "addresses.txt"
        data_file.write_text("emails\n")

        result = runner.invoke(main, ["bulk", "upload", str(data_file)])

        assert result.exit_code != 0
        assert cli_transport.requests == []

    def test_upload_rejected(self, runner, cli_transport, upload_slot_payload, tmp_path):
        """Test that a failed PUT exits 1."""
        csv_file = tmp_path / "addresses.csv"
        csv_file.write_bytes(b"emails\n")
        cli_transport.queue(200, upload_slot_payload).queue(403)

        result = runner.invoke(main, ["bulk", "upload", str(csv_file)])

        assert result.exit_code == 1
        assert "403" in result.output

    def test_status(self, runner, cli_transport):
        """Test showing job status."""
        cli_transport.queue(200, {
            "result": {
                "id": "J1",
                "status": "Error",
                "errors": [{"message": "bad header row"}],
                "is_download_available": False,
            }
        })

        result = runner.invoke(main, ["bulk", "status", "J1"])

        assert result.exit_code == 0, result.output
        assert "error" in result.output
        assert "bad header row" in result.output
        assert "Download available: no" in result.output

    def test_list(self, runner, cli_transport):
        """Test listing jobs."""
        cli_transport.queue(200, {"result": [{"id": "J1", "status": "Queued"}]})

        result = runner.invoke(main, ["bulk", "list"])

        assert result.exit_code == 0, result.output
        assert "J1" in result.output
        assert "queued" in result.output

    def test_list_empty(self, runner, cli_transport):
        """Test listing with no jobs."""
        cli_transport.queue(200, {"result": []})

        result = runner.invoke(main, ["bulk", "list"])

        assert result.exit_code == 0
        assert "No bulk validation jobs found" in result.output
