"""Tests for the command-line interface."""

import os
from unittest.mock import patch

import pytest

from paypal_checkout.cli import build_parser, run_cli


@pytest.fixture
def base_args(tmp_path):
    return [
        "--env-file",
        str(tmp_path / "absent.env"),
        "--set",
        "PAYPAL_CLIENT_ID=cli-id",
        "--set",
        "PAYPAL_CLIENT_SECRET=cli-secret",
        "--set",
        "PAYPAL_API_URL=https://api.gateway.test",
    ]


@pytest.fixture
def cli_session(session):
    with patch("paypal_checkout.cli.requests.Session", return_value=session):
        yield session


class TestParser:
    def test_rejects_malformed_override(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--set", "NOEQUALS", "token"])

    def test_requires_a_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestRunCli:
    def test_invalid_configuration(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            assert run_cli(["--env-file", str(tmp_path / "absent.env"), "token"]) == 1

    def test_token(self, base_args, cli_session, make_response, token_payload):
        cli_session.request.return_value = make_response(200, token_payload)

        assert run_cli(base_args + ["token"]) == 0
        assert cli_session.request.call_args.kwargs["auth"] == ("cli-id", "cli-secret")
        cli_session.close.assert_called_once()

    def test_token_rejected(self, base_args, cli_session, make_response):
        cli_session.request.return_value = make_response(401, '{"error":"invalid_client"}')

        assert run_cli(base_args + ["token"]) == 1

    def test_begin_prints_approval_url(
        self, base_args, cli_session, make_response, token_payload, created_payment_payload, capsys
    ):
        cli_session.request.side_effect = [
            make_response(200, token_payload),
            make_response(201, created_payment_payload),
        ]

        assert run_cli(base_args + ["begin", "--subtotal", "1.00", "--tax", "0.20", "--shipping", "2.00"]) == 0

        out = capsys.readouterr().out
        assert "PAY-6RV70583SB702805EKEYSZ6Y" in out
        assert "https://www.sandbox.paypal.com/" in out

    def test_begin_rejects_bad_amount(self, base_args, cli_session, make_response, token_payload):
        cli_session.request.return_value = make_response(200, token_payload)

        assert run_cli(base_args + ["begin", "--subtotal", "lots"]) == 1

    def test_begin_rejects_oversized_amount(self, base_args, cli_session, make_response, token_payload):
        cli_session.request.return_value = make_response(200, token_payload)

        assert run_cli(base_args + ["begin", "--subtotal", "1e30"]) == 1
        assert cli_session.request.call_count == 1

    def test_resume_completed(
        self, base_args, cli_session, make_response, token_payload, executed_payment_payload, sale_payload
    ):
        cli_session.request.side_effect = [
            make_response(200, token_payload),
            make_response(200, executed_payment_payload),
            make_response(200, sale_payload),
        ]

        args = base_args + ["resume", "--payment-id", "PAY-6RV70583SB702805EKEYSZ6Y", "--payer-id", "P1"]
        assert run_cli(args) == 0

    def test_resume_pending_sale_fails(
        self, base_args, cli_session, make_response, token_payload, executed_payment_payload, sale_payload
    ):
        cli_session.request.side_effect = [
            make_response(200, token_payload),
            make_response(200, executed_payment_payload),
            make_response(200, dict(sale_payload, state="pending")),
        ]

        args = base_args + ["resume", "--payment-id", "PAY-6RV70583SB702805EKEYSZ6Y", "--payer-id", "P1"]
        assert run_cli(args) == 1
