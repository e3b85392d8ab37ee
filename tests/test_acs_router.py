import logging

import pytest
from fastapi.testclient import TestClient

from payzen_ws.errors import EncodingError
from payzen_ws.main import create_app, create_app_from_settings
from payzen_ws.result import OperationKind, ServiceResult, aggregate
from payzen_ws.routers.acs import render_acs_form
from payzen_ws.settings import Settings

from conftest import OK_COMMON


@pytest.fixture
def api(payment_client):
    return TestClient(create_app(payment_client))


def test_health(api):
    resp = api.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_acs_return_finalises_payment(api, fake_payzen):
    fake_payzen.reply("createPayment", {
        "commonResponse": OK_COMMON,
        "paymentResponse": {"transactionUuid": "a1b2c3d4"},
    })

    resp = api.post("/acs/return", data={"PaRes": "eJzPaRes", "MD": "JSESSIONID=abc+req-42"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["operation"] == "createPayment"
    assert body["payment_response"]["transaction_uuid"] == "a1b2c3d4"
    assert body["session_id"] == "JSESSIONID=abc"
    assert fake_payzen.requests[0].headers["Cookie"] == "JSESSIONID=abc"
    assert fake_payzen.body()["threeDSRequest"]["pares"] == "eJzPaRes"


def test_malformed_md_is_bad_request(api, fake_payzen):
    resp = api.post("/acs/return", data={"PaRes": "eJzPaRes", "MD": "garbage"})

    assert resp.status_code == 400
    assert fake_payzen.requests == []


def test_missing_form_fields(api):
    assert api.post("/acs/return", data={"PaRes": "x"}).status_code == 422


def test_gateway_failure(api, fake_payzen):
    fake_payzen.reply("createPayment", {"fault": "boom"}, status=500)

    resp = api.post("/acs/return", data={"PaRes": "eJzPaRes", "MD": "JSESSIONID=abc+req-42"})

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Payment gateway unreachable"


def test_acs_callback_receives_result(payment_client):
    seen = []
    api = TestClient(create_app(payment_client, on_response=seen.append))

    api.post("/acs/return", data={"PaRes": "p", "MD": "JSESSIONID=abc+req-42"})

    assert len(seen) == 1
    assert seen[0].operation is OperationKind.CREATE_PAYMENT


class TestAcsForm:
    def test_form_posts_pareq_md_and_term_url(self, enrolled_create_reply):
        result = aggregate(OperationKind.CREATE_PAYMENT, enrolled_create_reply, session_id="JSESSIONID=abc")

        page = render_acs_form(result, "https://shop.test/acs/return?a=1&b=2")

        assert 'action="https://acs.example.test/pareq"' in page
        assert 'name="PaReq" value="eJxVUttu"' in page
        assert 'name="MD" value="JSESSIONID=abc+req-42"' in page
        assert 'value="https://shop.test/acs/return?a=1&amp;b=2"' in page

    def test_no_redirection(self):
        result = ServiceResult(operation=OperationKind.CREATE_PAYMENT, session_id="JSESSIONID=abc")
        with pytest.raises(EncodingError):
            render_acs_form(result, "https://shop.test/acs/return")


def test_app_from_settings_sets_log_level():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        settings = Settings(_env_file=None, SHOP_ID="1", SHOP_KEY="k", LOG_LEVEL="debug")
        api = TestClient(create_app_from_settings(settings))

        assert root.level == logging.DEBUG
        assert api.get("/health").status_code == 200
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
