"""Tests for money formatting and request bodies."""

import json
from decimal import Decimal

import pytest

from paypal_checkout import build_payment_intent, format_money
from paypal_checkout.core.payloads import build_amount, build_execute_body


class TestFormatMoney:
    """Tests for the two-decimal wire format."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, "1.00"),
            (0.2, "0.20"),
            (2.0, "2.00"),
            ("3.2", "3.20"),
            (Decimal("10.005"), "10.00"),
            (Decimal("10.015"), "10.02"),
            (0, "0.00"),
            (1234567.891, "1234567.89"),
        ],
    )
    def test_formats_to_two_decimals(self, value, expected):
        assert format_money(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(0.125, "0.12"), (0.375, "0.38"), (2.675, "2.67"), (1.005, "1.00")],
    )
    def test_float_rounds_its_exact_binary_value_half_to_even(self, value, expected):
        """Test that floats format the way printf("%.2f") formats them."""
        assert format_money(value) == expected

    @pytest.mark.parametrize("value", ["abc", float("nan"), float("inf"), None, "1e30", 1e30])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            format_money(value)


class TestBuildAmount:
    """Tests for the amount breakdown."""

    def test_total_is_sum_of_parts(self):
        amount = build_amount(1.00, 0.20, 2.00, "USD")
        assert amount.total == "3.20"
        assert amount.currency == "USD"
        assert amount.details.subtotal == "1.00"
        assert amount.details.tax == "0.20"
        assert amount.details.shipping == "2.00"

    def test_total_is_summed_before_rounding(self):
        """Test that the total is not re-derived from the rounded parts."""
        amount = build_amount("0.004", "0.004", "0.004", "USD")
        assert amount.details.subtotal == "0.00"
        assert amount.details.tax == "0.00"
        assert amount.details.shipping == "0.00"
        assert amount.total == format_money(Decimal("0.012")) == "0.01"

    @pytest.mark.parametrize(
        "subtotal, tax, shipping",
        [
            ("19.995", "1.115", "0.005"),
            (0.1, 0.2, 0.3),
            (99.99, 7.5, 0),
            (0, 0, 0),
        ],
    )
    def test_total_matches_formatted_unrounded_sum(self, subtotal, tax, shipping):
        amount = build_amount(subtotal, tax, shipping, "EUR")
        expected = format_money(
            Decimal(subtotal) + Decimal(tax) + Decimal(shipping)
        )
        assert amount.total == expected

    def test_negative_amounts_pass_through(self):
        amount = build_amount("-1", "0", "0", "USD")
        assert amount.total == "-1.00"


class TestPaymentIntent:
    """Tests for the create-payment request body."""

    def test_serializes_gateway_document(self):
        intent = build_payment_intent(
            1.00,
            0.20,
            2.00,
            "USD",
            "The products that I have purchased:",
            "http://localhost:3000/ok",
            "http://localhost:3000/cancel",
        )
        assert intent.to_dict() == {
            "intent": "sale",
            "redirect_urls": {
                "return_url": "http://localhost:3000/ok",
                "cancel_url": "http://localhost:3000/cancel",
            },
            "payer": {"payment_method": "paypal"},
            "transactions": [
                {
                    "amount": {
                        "total": "3.20",
                        "currency": "USD",
                        "details": {
                            "subtotal": "1.00",
                            "tax": "0.20",
                            "shipping": "2.00",
                        },
                    },
                    "description": "The products that I have purchased:",
                }
            ],
        }

    def test_never_serializes_null(self):
        intent = build_payment_intent(1, 0, 0, "USD", "", "http://a/ok", "http://a/cancel")
        assert "null" not in json.dumps(intent.to_dict())

    def test_execute_body(self):
        assert build_execute_body('PAYER"1') == {"payer_id": 'PAYER"1'}
