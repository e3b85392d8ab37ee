import html
import logging
from typing import Optional

from fastapi import APIRouter, Form, HTTPException

from ..callbacks.dispatcher import ResponseCallback
from ..client import PaymentClient
from ..errors import EncodingError, MalformedTokenError, TransportError
from ..result import ServiceResult
from ..schemas.requests import ThreeDSFinalizeRequest
from ..transport.credentials import ConfigOverride

logger = logging.getLogger(__name__)


def render_acs_form(result: ServiceResult, term_url: str) -> str:
    """
    Auto-submitting page that sends the shopper's browser to the ACS.

    Posts PaReq, MD and TermUrl; the ACS posts PaRes and MD back to TermUrl.
    """
    md = result.redirect_acs_md
    data = result.three_ds_response.authentication_request_data if result.three_ds_response else None
    if not md or not data or not data.three_ds_acs_url or not data.three_ds_encoded_pareq:
        raise EncodingError("Result carries no 3-D Secure redirection")

    acs_url = html.escape(data.three_ds_acs_url, quote=True)
    pareq = html.escape(data.three_ds_encoded_pareq, quote=True)
    md_value = html.escape(md, quote=True)
    term = html.escape(term_url, quote=True)

    return f"""<!DOCTYPE html>
<html>
<head>
    <title>3-D Secure</title>
    <meta charset="utf-8">
</head>
<body onload="document.forms[0].submit()">
    <form method="post" action="{acs_url}">
        <input type="hidden" name="PaReq" value="{pareq}">
        <input type="hidden" name="MD" value="{md_value}">
        <input type="hidden" name="TermUrl" value="{term}">
        <noscript><button type="submit">Continue</button></noscript>
    </form>
</body>
</html>
"""


def build_acs_router(
    client: PaymentClient,
    on_response: Optional[ResponseCallback] = None,
    config: Optional[ConfigOverride] = None,
) -> APIRouter:
    """Router for the ACS return URL (TermUrl)."""
    router = APIRouter()

    @router.post("/acs/return")
    async def acs_return(
        pares: str = Form(..., alias="PaRes"),
        md: str = Form(..., alias="MD"),
    ):
        try:
            result = await client.create_3ds(
                ThreeDSFinalizeRequest(pares=pares, md=md),
                config=config,
                on_response=on_response,
            )
        except MalformedTokenError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except TransportError as e:
            logger.warning("3-D Secure finalisation failed: %s", e)
            raise HTTPException(status_code=502, detail="Payment gateway unreachable")

        return result.model_dump(mode="json", exclude_none=True)

    return router
