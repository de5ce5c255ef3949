"""Tests for the Razorpay adapter, with the HTTP API mocked out."""

import json

import httpx
import pytest

from storefront.domain.exceptions import (
    GatewayUnavailable,
    IntentNotFound,
    InvalidAmount,
    SignatureMismatch,
)
from storefront.domain.model.payment import PaymentConfirmation, PaymentIntentStatus
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.gateway.hmac_gateway import compute_signature
from storefront.infrastructure.gateway.razorpay import RazorpayGateway
from tests.fakes import FakePaymentIntentRepository

KEY_ID = "rzp_test_key"
SECRET = "rzp_test_secret"


def _gateway(handler) -> tuple[RazorpayGateway, FakePaymentIntentRepository]:
    intents = FakePaymentIntentRepository()
    client = httpx.Client(
        base_url="https://api.razorpay.test",
        auth=(KEY_ID, SECRET),
        transport=httpx.MockTransport(handler),
    )
    return RazorpayGateway(KEY_ID, SECRET, intents, client=client), intents


def _ok(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(
        200,
        json={"id": "order_RZP123", "amount": body["amount"], "currency": body["currency"]},
    )


class TestCreateIntent:

    def test_posts_amount_in_paise(self):
        seen: list[httpx.Request] = []

        def handler(request):
            seen.append(request)
            return _ok(request)

        gateway, intents = _gateway(handler)
        intent = gateway.create_intent(Money.of("499.00"), "rcpt_1", "c1", "12 MG Road")

        assert intent.id == "order_RZP123"
        assert intents.get_by_id("order_RZP123") is intent
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/orders"
        assert json.loads(request.content) == {
            "amount": 49900,
            "currency": "INR",
            "receipt": "rcpt_1",
        }
        assert request.headers["authorization"].startswith("Basic ")

    def test_zero_amount_rejected_without_calling_api(self):
        def handler(request):
            raise AssertionError("API must not be called")

        gateway, _ = _gateway(handler)
        with pytest.raises(InvalidAmount):
            gateway.create_intent(Money.zero(), "rcpt_1", "c1", "12 MG Road")

    def test_api_error_status(self):
        gateway, intents = _gateway(lambda request: httpx.Response(401, json={"error": {}}))
        with pytest.raises(GatewayUnavailable, match="401"):
            gateway.create_intent(Money.of("10.00"), "rcpt_1", "c1", "12 MG Road")
        assert intents._store == {}

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        gateway, _ = _gateway(handler)
        with pytest.raises(GatewayUnavailable, match="unreachable"):
            gateway.create_intent(Money.of("10.00"), "rcpt_1", "c1", "12 MG Road")

    def test_response_without_id(self):
        gateway, _ = _gateway(lambda request: httpx.Response(200, json={"status": "created"}))
        with pytest.raises(GatewayUnavailable, match="no order id"):
            gateway.create_intent(Money.of("10.00"), "rcpt_1", "c1", "12 MG Road")

    def test_unreadable_response(self):
        gateway, _ = _gateway(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(GatewayUnavailable, match="unreadable"):
            gateway.create_intent(Money.of("10.00"), "rcpt_1", "c1", "12 MG Road")


class TestVerify:

    def test_checkout_signature_verifies(self):
        gateway, intents = _gateway(_ok)
        gateway.create_intent(Money.of("499.00"), "rcpt_1", "c1", "12 MG Road")

        signature = compute_signature(SECRET, "order_RZP123", "pay_ABC")
        verified = gateway.verify(PaymentConfirmation("order_RZP123", "pay_ABC", signature))

        assert verified.payment_id == "pay_ABC"
        assert verified.amount == Money.of("499.00")
        assert intents.get_by_id("order_RZP123").status == PaymentIntentStatus.CREATED

        gateway.claim(verified)
        assert intents.get_by_id("order_RZP123").status == PaymentIntentStatus.VERIFIED

    def test_signature_for_other_payment_rejected(self):
        gateway, intents = _gateway(_ok)
        gateway.create_intent(Money.of("499.00"), "rcpt_1", "c1", "12 MG Road")

        signature = compute_signature(SECRET, "order_RZP123", "pay_OTHER")
        with pytest.raises(SignatureMismatch):
            gateway.verify(PaymentConfirmation("order_RZP123", "pay_ABC", signature))
        assert intents.get_by_id("order_RZP123").status == PaymentIntentStatus.FAILED

    def test_unknown_intent(self):
        gateway, _ = _gateway(_ok)
        with pytest.raises(IntentNotFound):
            gateway.verify(PaymentConfirmation("order_nope", "pay_ABC", "sig"))


class TestSignature:

    def test_known_vector(self):
        # HMAC-SHA256("order_1|pay_1", key="secret")
        assert compute_signature("secret", "order_1", "pay_1") == (
            "52115a0d3400de9e86aade1f1b6eba9e8974604f4e267a9e9a16633a4c8dd2cb"
        )
