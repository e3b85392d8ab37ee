from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..errors import ConfigurationError
from ..settings import Settings

MODES = ("TEST", "PRODUCTION")

ConfigOverride = Mapping[str, Any]


class Credentials(BaseModel):
    """
    Shop credentials and endpoint for one call.

    Instances are frozen: a per-call override produces a new value through
    `with_override`, the process defaults are never touched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    shop_id: Optional[str] = None
    shop_key: Optional[str] = Field(default=None, repr=False)
    mode: Optional[str] = "TEST"
    ws_user: Optional[str] = None
    return_url: Optional[str] = None
    ecs_payment_id: Optional[str] = None
    remote_id: Optional[str] = None

    endpoint_host: Optional[str] = "secure.payzen.eu"
    endpoint_path: str = "/vads-ws/v5"
    secure_connection: bool = True
    connection_timeout: float = 10.0
    request_timeout: float = 30.0

    @field_validator("mode")
    @classmethod
    def _check_mode(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        mode = v.strip().upper()
        if mode not in MODES:
            raise ValueError(f"mode must be one of {', '.join(MODES)}, got {v!r}")
        return mode

    # sent as HTTP header values, which httpx only encodes as ASCII
    @field_validator("shop_id", "ws_user", "return_url", "ecs_payment_id", "remote_id")
    @classmethod
    def _check_header_safe(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.isascii():
            raise ValueError(f"must be ASCII to travel as a header, got {v!r}")
        return v

    @field_validator("endpoint_path")
    @classmethod
    def _check_path(cls, v: str) -> str:
        return "/" + v.strip("/") if v.strip("/") else ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credentials":
        try:
            return cls(
                shop_id=settings.SHOP_ID,
                shop_key=settings.SHOP_KEY,
                mode=settings.MODE,
                ws_user=settings.WS_USER,
                return_url=settings.RETURN_URL,
                ecs_payment_id=settings.ECS_PAYMENT_ID,
                remote_id=settings.REMOTE_ID,
                endpoint_host=settings.ENDPOINT_HOST,
                endpoint_path=settings.ENDPOINT_PATH,
                secure_connection=settings.SECURE_CONNECTION,
                connection_timeout=settings.CONNECTION_TIMEOUT,
                request_timeout=settings.REQUEST_TIMEOUT,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid PAYZEN_* settings: {exc}") from exc

    def with_override(self, config: Optional[ConfigOverride]) -> "Credentials":
        """Return these credentials with the recognised keys of `config` applied."""
        if not config:
            return self

        recognised: Dict[str, Any] = {}
        for key, value in config.items():
            field_name = _OVERRIDE_KEYS.get(key)
            if field_name is None or value is None:
                continue
            recognised[field_name] = value
        if not recognised:
            return self

        data = self.model_dump()
        data.update(recognised)
        try:
            return Credentials.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration override: {exc}") from exc

    def require(self, *fields: str) -> None:
        missing = [name for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigurationError(
                "Missing required configuration: " + ", ".join(_field_alias(m) for m in missing)
            )

    @property
    def endpoint_url(self) -> str:
        scheme = "https" if self.secure_connection else "http"
        return f"{scheme}://{self.endpoint_host}{self.endpoint_path}"


def _field_alias(name: str) -> str:
    return Credentials.model_fields[name].alias or name


def _build_override_keys() -> Dict[str, str]:
    keys: Dict[str, str] = {}
    for name, info in Credentials.model_fields.items():
        keys[name] = name
        if info.alias:
            keys[info.alias] = name
    return keys


# camelCase keys of the PayZen properties file and snake_case field names
_OVERRIDE_KEYS = _build_override_keys()
