import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Mapping, Optional

from ..errors import ConfigurationError, TransportError
from ..utils.security import hmac_sha256_b64, tokens_match
from .credentials import Credentials

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Header names that identify and authenticate the call
SIGNED_HEADERS = ("shopId", "requestId", "timestamp", "mode", "authToken")
_SIGNED_LOWER = frozenset(h.lower() for h in SIGNED_HEADERS)

_OPTIONAL_HEADERS = (
    ("wsUser", "ws_user"),
    ("returnUrl", "return_url"),
    ("ecsPaymentId", "ecs_payment_id"),
    ("remoteId", "remote_id"),
)


def compute_auth_token(shop_key: str, request_id: str, timestamp: str) -> str:
    return hmac_sha256_b64(shop_key, f"{request_id}{timestamp}".encode("utf-8"))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_request_id() -> str:
    return str(uuid.uuid4())


class CredentialSigner:
    """
    Builds the authentication header block of one outbound call.

    The shop key never leaves the process: only
    base64(HMAC-SHA256(shop_key, requestId + timestamp)) is sent as `authToken`.
    A signer keeps no state between `sign` calls besides its inputs.
    """

    def __init__(
        self,
        credentials: Credentials,
        clock: Optional[Callable[[], datetime]] = None,
        request_id_factory: Optional[Callable[[], str]] = None,
    ):
        credentials.require("shop_id", "shop_key", "mode")
        self.credentials = credentials
        self._clock = clock or _utc_now
        self._request_id_factory = request_id_factory or _new_request_id

    def sign(self, extra_headers: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        creds = self.credentials
        request_id = self._request_id_factory()
        timestamp = self._clock().astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)

        headers: Dict[str, str] = {}
        # dynamic headers go first so they can never shadow the signed block
        for name, value in (extra_headers or {}).items():
            if name.lower() in _SIGNED_LOWER or value is None:
                continue
            value = str(value)
            if not (name.isascii() and value.isascii()):
                raise ConfigurationError(f"Header {name!r} must be ASCII")
            headers[name] = value

        headers.update({
            "shopId": creds.shop_id,
            "requestId": request_id,
            "timestamp": timestamp,
            "mode": creds.mode,
            "authToken": compute_auth_token(creds.shop_key, request_id, timestamp),
        })
        for header, field in _OPTIONAL_HEADERS:
            value = getattr(creds, field)
            if value:
                headers[header] = value

        logger.debug("Signed request %s for shop %s (%s)", request_id, creds.shop_id, creds.mode)
        return headers

    def verify_response_token(self, headers: Mapping[str, str], operation: Optional[str] = None) -> None:
        """
        Check the token the service puts on its reply, when it sends one.

        The reply token is HMAC(shop_key, timestamp + requestId), the reverse
        order of the request token.
        """
        received = headers.get("authToken")
        request_id = headers.get("requestId")
        timestamp = headers.get("timestamp")
        if not (received and request_id and timestamp):
            return

        expected = hmac_sha256_b64(self.credentials.shop_key, f"{timestamp}{request_id}".encode("utf-8"))
        if not tokens_match(expected, received):
            raise TransportError(
                f"Response authToken mismatch for request {request_id}",
                operation=operation,
            )
