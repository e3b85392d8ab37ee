"""
3-D Secure session continuity.

Between the createPayment call that answers "card enrolled" and the call that
finalises the payment, the shopper's browser visits the ACS. The service keeps
the suspended payment in its HTTP session, so the follow-up call must present
the same session cookie and the 3-D Secure request id. Both travel through the
browser inside one opaque string, the MD:

    MD = <session cookie> + "+" + <threeDSRequestId>

Nothing is kept here between the two calls.
"""
import logging
from typing import Dict, Optional, Tuple

import httpx

from .errors import EncodingError, MalformedTokenError

logger = logging.getLogger(__name__)

MD_DELIMITER = "+"
SESSION_COOKIE_NAME = "JSESSIONID"


def begin_challenge(session_cookie: str, request_id: str) -> str:
    """Pack the session cookie and the 3-D Secure request id into an MD."""
    for label, part in (("session cookie", session_cookie), ("request id", request_id)):
        if not part:
            raise EncodingError(f"Cannot build MD: {label} is empty")
        if MD_DELIMITER in part:
            raise EncodingError(f"Cannot build MD: {label} contains {MD_DELIMITER!r}")
    return f"{session_cookie}{MD_DELIMITER}{request_id}"


def resume_challenge(md: str) -> Tuple[str, str]:
    """Split an MD back into (session cookie, request id)."""
    parts = (md or "").split(MD_DELIMITER)
    if len(parts) != 2 or not all(parts):
        raise MalformedTokenError("MD must be '<session cookie>+<request id>'")
    return parts[0], parts[1]


def extract_session_cookie(response: httpx.Response) -> Optional[str]:
    """
    Read the HTTP session cookie set by the service, as `name=value`.

    JSESSIONID wins when several cookies are set; otherwise the first one.
    """
    first: Optional[str] = None
    for raw in response.headers.get_list("set-cookie"):
        pair = raw.split(";", 1)[0].strip()
        name, sep, _ = pair.partition("=")
        if not sep or not name:
            continue
        if name.strip() == SESSION_COOKIE_NAME:
            return pair
        if first is None:
            first = pair
    return first


def session_headers(session_cookie: Optional[str]) -> Dict[str, str]:
    if not session_cookie:
        return {}
    logger.info("Setting session Cookie: %s", mask_cookie(session_cookie))
    return {"Cookie": session_cookie}


def mask_cookie(session_cookie: str) -> str:
    name, sep, _ = session_cookie.partition("=")
    return f"{name}=***" if sep else "***"
