"""
Client SDK for the PayZen payment web services (v5).

    from payzen_ws import PaymentClient, CreatePaymentRequest
    from payzen_ws.settings import get_settings

    client = PaymentClient.from_settings(get_settings())
    result = await client.create(CreatePaymentRequest.for_card(1000, 978, "4970100000000003", 12, 2030, "123"))
"""
from .callbacks.dispatcher import ResponseCallback, ResponseDispatcher
from .client import PaymentClient
from .errors import (
    CallbackError,
    ConfigurationError,
    EncodingError,
    MalformedTokenError,
    PayzenError,
    SessionTokenError,
    TransportError,
)
from .result import FRAGMENT_MAP, Fragment, OperationKind, ServiceResult, aggregate
from .schemas.requests import (
    CreatePaymentRequest,
    CreateTokenRequest,
    LegacyTransactionKeyRequest,
    QueryRequest,
    RefundPaymentRequest,
    ThreeDSFinalizeRequest,
    UpdatePaymentRequest,
    ValidatePaymentRequest,
)
from .session import begin_challenge, resume_challenge
from .transport.credentials import Credentials

__all__ = [
    "CallbackError",
    "ConfigurationError",
    "CreatePaymentRequest",
    "CreateTokenRequest",
    "Credentials",
    "EncodingError",
    "FRAGMENT_MAP",
    "Fragment",
    "LegacyTransactionKeyRequest",
    "MalformedTokenError",
    "OperationKind",
    "PaymentClient",
    "PayzenError",
    "QueryRequest",
    "RefundPaymentRequest",
    "ResponseCallback",
    "ResponseDispatcher",
    "ServiceResult",
    "SessionTokenError",
    "ThreeDSFinalizeRequest",
    "TransportError",
    "UpdatePaymentRequest",
    "ValidatePaymentRequest",
    "aggregate",
    "begin_challenge",
    "resume_challenge",
]
