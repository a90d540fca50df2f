"""Tests for sale lookup and verification."""

import pytest

from paypal_checkout import Sale, SaleLookupError, VerificationError, verify_completed


class TestLookupSale:
    def test_success(self, client, session, make_response, token, sale_payload):
        session.request.return_value = make_response(200, sale_payload)

        sale = client.lookup_sale(token, "36C38912MN9658832")

        assert sale.id == "36C38912MN9658832"
        assert sale.state == "completed"
        assert sale.parent_payment == "PAY-6RV70583SB702805EKEYSZ6Y"
        assert sale.amount.total == "3.20"
        assert sale.links[0].rel == "self"
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://api.gateway.test/v1/payments/sale/36C38912MN9658832")
        assert kwargs["headers"]["Authorization"] == f"Bearer {token.access_token}"

    @pytest.mark.parametrize("status", [201, 404, 500])
    def test_non_200_is_lookup_error(self, client, session, make_response, token, status):
        session.request.return_value = make_response(status, '{"name":"INVALID_RESOURCE_ID"}')

        with pytest.raises(SaleLookupError) as exc_info:
            client.lookup_sale(token, "NOPE")
        assert exc_info.value.status_code == status


class TestVerifyCompleted:
    def test_completed_passes(self, sale_payload):
        sale = Sale.from_response(sale_payload)
        assert verify_completed(sale) is sale

    @pytest.mark.parametrize(
        "state", ["pending", "refunded", "partially_refunded", "denied", "Completed", ""]
    )
    def test_any_other_state_fails(self, state):
        with pytest.raises(VerificationError) as exc_info:
            verify_completed(Sale(id="S1", state=state))
        assert exc_info.value.actual_state == state

    def test_missing_state_fails_with_empty_state(self):
        with pytest.raises(VerificationError) as exc_info:
            verify_completed(Sale(id="S1", state=None))
        assert exc_info.value.actual_state == ""

    def test_scenario_pending(self, client, session, make_response, token):
        session.request.return_value = make_response(200, {"state": "pending"})

        sale = client.lookup_sale(token, "S1")

        with pytest.raises(VerificationError) as exc_info:
            client.verify_completed(sale)
        assert exc_info.value.actual_state == "pending"
