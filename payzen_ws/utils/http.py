from typing import Optional

import httpx


def client(
    timeout_sec: float = 30.0,
    connect_timeout_sec: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    timeout = httpx.Timeout(timeout_sec, connect=connect_timeout_sec or timeout_sec)
    return httpx.AsyncClient(timeout=timeout, transport=transport)
