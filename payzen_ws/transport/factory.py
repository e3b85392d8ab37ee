import logging
from typing import Any, Dict, Mapping, NamedTuple, Optional

import httpx

from ..errors import TransportError
from ..session import extract_session_cookie, session_headers
from ..utils.http import client
from .credentials import ConfigOverride, Credentials
from .signer import CredentialSigner

logger = logging.getLogger(__name__)


class PortResponse(NamedTuple):
    payload: Dict[str, Any]
    session_cookie: Optional[str]


class ServicePort:
    """
    Handle on the web service for one logical operation.

    Bound to one set of credentials. Every `call` opens its own httpx client,
    sends exactly one request and closes it; nothing is retried.
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.signer = CredentialSigner(credentials)
        self._transport = transport

    @property
    def mode(self) -> Optional[str]:
        return self.credentials.mode

    def url_for(self, operation: str) -> str:
        return f"{self.credentials.endpoint_url}/{operation}"

    async def call(
        self,
        operation: str,
        body: Mapping[str, Any],
        session_cookie: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> PortResponse:
        url = self.url_for(operation)
        request_headers = self.signer.sign(headers)
        request_headers.update(session_headers(session_cookie))
        request_headers["Content-Type"] = "application/json"

        logger.info("PayZen %s -> %s (request %s)", operation, url, request_headers["requestId"])

        creds = self.credentials
        try:
            async with client(
                timeout_sec=creds.request_timeout,
                connect_timeout_sec=creds.connection_timeout,
                transport=self._transport,
            ) as c:
                resp = await c.post(url, json=dict(body), headers=request_headers)
        except httpx.HTTPError as exc:
            raise TransportError(f"{operation} failed: {exc}", operation=operation) from exc

        try:
            js = resp.json()
        except ValueError:
            js = resp.text or ""

        if not resp.is_success:
            logger.warning("PayZen %s answered HTTP %s", operation, resp.status_code)
            raise TransportError(
                f"{operation} answered HTTP {resp.status_code}",
                operation=operation,
                status_code=resp.status_code,
                payload=js,
            )
        if not isinstance(js, dict):
            raise TransportError(
                f"{operation} answered with a non-JSON-object body",
                operation=operation,
                status_code=resp.status_code,
                payload=js,
            )

        self.signer.verify_response_token(resp.headers, operation=operation)
        return PortResponse(payload=js, session_cookie=extract_session_cookie(resp))


class ClientFactory:
    """
    Builds one ServicePort per operation from the injected defaults.

    `defaults` is read, never changed; an override yields new credentials
    for that port only.
    """

    def __init__(
        self,
        defaults: Credentials,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.defaults = defaults
        self._transport = transport

    def build(self, config: Optional[ConfigOverride] = None) -> ServicePort:
        credentials = self.defaults.with_override(config)
        credentials.require("shop_id", "shop_key", "mode", "endpoint_host")
        return ServicePort(credentials, transport=self._transport)
