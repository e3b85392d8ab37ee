"""
Pytest configuration and shared fixtures.

`FakePayzen` stands in for the web service: it records every request and
answers per operation name (last path segment of the URL).
"""
import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from payzen_ws.client import PaymentClient
from payzen_ws.transport.credentials import Credentials

SHOP_ID = "12345678"
SHOP_KEY = "1111111111111111"

OK_COMMON = {"responseCode": 0, "responseCodeDetail": "Action successfully completed"}


class FakePayzen:
    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._replies: Dict[str, Tuple[int, Any, List[Tuple[str, str]]]] = {}

    def reply(
        self,
        operation: str,
        body: Any,
        status: int = 200,
        headers: Optional[List[Tuple[str, str]]] = None,
    ) -> None:
        self._replies[operation] = (status, body, headers or [])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        operation = request.url.path.rsplit("/", 1)[-1]
        status, body, headers = self._replies.get(operation, (200, {"commonResponse": OK_COMMON}, []))
        return httpx.Response(status, json=body, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def operations(self) -> List[str]:
        return [r.url.path.rsplit("/", 1)[-1] for r in self.requests]

    def body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture
def credentials():
    return Credentials(shop_id=SHOP_ID, shop_key=SHOP_KEY, mode="TEST")


@pytest.fixture
def fake_payzen():
    return FakePayzen()


@pytest.fixture
def payment_client(credentials, fake_payzen):
    return PaymentClient(credentials, transport=fake_payzen.transport)


@pytest.fixture
def enrolled_create_reply():
    """createPayment answer for a card enrolled in 3-D Secure"""
    return {
        "commonResponse": {"responseCode": 0, "transactionStatusLabel": "WAITING_AUTHORISATION"},
        "paymentResponse": {"transactionUuid": "a1b2c3d4", "amount": 1000, "currency": 978},
        "orderResponse": {"orderId": "ORDER-1"},
        "cardResponse": {"number": "497010XXXXXX0003", "scheme": "VISA"},
        "threeDSResponse": {
            "authenticationRequestData": {
                "threeDSEnrolled": "Y",
                "threeDSRequestId": "req-42",
                "threeDSAcsUrl": "https://acs.example.test/pareq",
                "threeDSEncodedPareq": "eJxVUttu",
            }
        },
    }
