"""Tests for the payu-pl CLI."""

from __future__ import annotations

import hashlib
import json

from click.testing import CliRunner

from payu_pl.cli import main
from payu_pl.webhooks import build_signature_header

SECRET = "test_secret_key"
BODY = json.dumps(
    {"order": {"orderId": "OID-1", "status": "COMPLETED", "totalAmount": "21000", "currencyCode": "PLN"}}
).encode()


class TestCLIBasics:
    """Basic CLI tests."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "sign" in result.output
        assert "verify" in result.output

    def test_version_command(self):
        runner = CliRunner()
        result = runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert "Version:" in result.output
        assert "Python:" in result.output


class TestSignCommand:
    """Tests for sign command."""

    def test_sign_sha256(self):
        runner = CliRunner()
        result = runner.invoke(main, ["sign", "-", "--secret", SECRET], input=BODY)

        assert result.exit_code == 0
        assert result.output.strip() == build_signature_header(SECRET, BODY, "SHA256")

    def test_sign_md5(self):
        runner = CliRunner()
        result = runner.invoke(main, ["sign", "-", "--secret", "k", "--algorithm", "md5"], input=b"x")

        assert result.exit_code == 0
        assert result.output.strip() == f"signature={hashlib.md5(b'xk').hexdigest()};algorithm=MD5"

    def test_sign_unknown_algorithm(self):
        runner = CliRunner()
        result = runner.invoke(main, ["sign", "-", "--secret", "k", "-a", "rot13"], input=b"x")

        assert result.exit_code == 1
        assert "Error" in result.output


class TestVerifyCommand:
    """Tests for verify command."""

    def test_verify_valid(self, tmp_path):
        path = tmp_path / "body.json"
        path.write_bytes(BODY)
        header = build_signature_header(SECRET, BODY)

        runner = CliRunner()
        result = runner.invoke(main, ["verify", str(path), "--secret", SECRET, "-s", header])

        assert result.exit_code == 0
        assert "Signature verified" in result.output
        assert "OID-1" in result.output
        assert "210.00 PLN" in result.output

    def test_verify_invalid(self):
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["verify", "-", "--secret", SECRET, "-s", "signature=invalid;algorithm=SHA256"],
            input=BODY,
        )

        assert result.exit_code == 1
        assert "Signature verification failed" in result.output

    def test_verify_secret_from_env(self):
        header = build_signature_header("env-key", BODY)
        runner = CliRunner()
        result = runner.invoke(main, ["verify", "-", "-s", header], input=BODY, env={"PAYU_SECOND_KEY": "env-key"})

        assert result.exit_code == 0

    def test_verify_without_secret(self):
        runner = CliRunner()
        result = runner.invoke(main, ["verify", "-", "-s", "signature=x"], input=BODY)

        assert result.exit_code == 2
        assert "second_key not configured" in result.output
