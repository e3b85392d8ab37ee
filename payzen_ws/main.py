from typing import Optional

from fastapi import FastAPI

from .callbacks.dispatcher import ResponseCallback
from .client import PaymentClient
from .logging_config import init_logging
from .routers import acs
from .settings import Settings, get_settings


def create_app(
    client: PaymentClient,
    on_response: Optional[ResponseCallback] = None,
    title: str = "PayZen 3-D Secure return",
) -> FastAPI:
    app = FastAPI(title=title)

    app.include_router(acs.build_acs_router(client, on_response=on_response), tags=["3-D Secure"])

    @app.get("/health", tags=["Ops"])
    async def health():
        return {"status": "ok"}

    return app


def create_app_from_settings(
    settings: Optional[Settings] = None,
    on_response: Optional[ResponseCallback] = None,
) -> FastAPI:
    """App with the shop credentials and log level read from PAYZEN_* settings."""
    settings = settings or get_settings()
    init_logging(settings.LOG_LEVEL)
    return create_app(PaymentClient.from_settings(settings), on_response=on_response)
