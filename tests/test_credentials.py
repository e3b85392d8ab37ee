import pytest

from payzen_ws.errors import ConfigurationError
from payzen_ws.settings import Settings, get_settings
from payzen_ws.transport.credentials import Credentials
from payzen_ws.transport.factory import ClientFactory


class TestOverride:
    def test_camel_case_keys(self, credentials):
        merged = credentials.with_override({"shopId": "999", "shopKey": "other", "mode": "production"})

        assert merged.shop_id == "999"
        assert merged.shop_key == "other"
        assert merged.mode == "PRODUCTION"

    def test_snake_case_keys(self, credentials):
        merged = credentials.with_override({"endpoint_host": "ws.example.test", "ecs_payment_id": "ecs-1"})

        assert merged.endpoint_host == "ws.example.test"
        assert merged.ecs_payment_id == "ecs-1"

    def test_defaults_untouched(self, credentials):
        credentials.with_override({"shopId": "999"})
        assert credentials.shop_id == "12345678"

    def test_unknown_and_none_keys_ignored(self, credentials):
        assert credentials.with_override({"colour": "blue", "shopId": None}) is credentials
        assert credentials.with_override(None) is credentials

    def test_string_values_are_parsed(self, credentials):
        merged = credentials.with_override({"secureConnection": "false", "requestTimeout": "5"})

        assert merged.secure_connection is False
        assert merged.request_timeout == 5.0
        assert merged.endpoint_url == "http://secure.payzen.eu/vads-ws/v5"

    @pytest.mark.parametrize("override", [{"mode": "LIVE"}, {"connectionTimeout": "soon"}])
    def test_bad_value(self, credentials, override):
        with pytest.raises(ConfigurationError):
            credentials.with_override(override)

    @pytest.mark.parametrize("key", ["shopId", "wsUser", "returnUrl", "ecsPaymentId", "remoteId"])
    def test_header_values_must_be_ascii(self, credentials, key):
        with pytest.raises(ConfigurationError, match="ASCII"):
            credentials.with_override({key: "boutique-été"})

    def test_key_not_in_repr(self, credentials):
        assert credentials.shop_key not in repr(credentials)


class TestSettings:
    def test_from_settings(self):
        settings = Settings(_env_file=None, SHOP_ID="42", SHOP_KEY="k", MODE="production", ENDPOINT_PATH="ws/v5/")
        creds = Credentials.from_settings(settings)

        assert creds.shop_id == "42"
        assert creds.mode == "PRODUCTION"
        assert creds.endpoint_url == "https://secure.payzen.eu/ws/v5"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("PAYZEN_SHOP_ID", "77")
        assert Settings(_env_file=None).SHOP_ID == "77"

    def test_bad_mode_in_settings(self):
        with pytest.raises(ConfigurationError):
            Credentials.from_settings(Settings(_env_file=None, MODE="LIVE"))

    def test_defaults_built_once(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestFactory:
    def test_build_needs_credentials(self):
        factory = ClientFactory(Credentials())
        with pytest.raises(ConfigurationError):
            factory.build()

    def test_override_completes_defaults(self):
        factory = ClientFactory(Credentials())
        port = factory.build({"shopId": "1", "shopKey": "k"})
        assert port.credentials.shop_id == "1"

    def test_fresh_port_per_build(self, credentials):
        factory = ClientFactory(credentials)
        assert factory.build() is not factory.build()

    def test_url(self, credentials):
        port = ClientFactory(credentials).build()
        assert port.url_for("createPayment") == "https://secure.payzen.eu/vads-ws/v5/createPayment"
