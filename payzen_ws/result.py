"""
One result shape for every operation.

Each remote operation answers with its own subset of response fragments.
`FRAGMENT_MAP` declares, per operation, which fragments are copied into a
`ServiceResult`; the rest stay `None`. The table mirrors what the service
contract fills for each operation. Where a fragment looks missing (the shopping
cart on details/update, the token anywhere) it is left out on purpose, see
DESIGN.md, rather than added without a contract to back it.
"""
import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .errors import EncodingError, TransportError
from .schemas.responses import (
    AuthorizationResponse,
    CaptureResponse,
    CardResponse,
    CommonResponse,
    CustomerResponse,
    ExtraResponse,
    FraudManagementResponse,
    MarkResponse,
    OrderResponse,
    PaymentResponse,
    ResponseFragment,
    ShoppingCartResponse,
    SubscriptionResponse,
    ThreeDSResponse,
    TokenResponse,
)
from .session import begin_challenge

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    """Remote operations, valued by their name on the wire."""
    CREATE_PAYMENT = "createPayment"
    GET_PAYMENT_DETAILS = "getPaymentDetails"
    FIND_PAYMENTS = "findPayments"
    GET_PAYMENT_UUID = "getPaymentUuid"
    CANCEL_PAYMENT = "cancelPayment"
    UPDATE_PAYMENT = "updatePayment"
    VALIDATE_PAYMENT = "validatePayment"
    REFUND_PAYMENT = "refundPayment"
    CREATE_TOKEN_FROM_TRANSACTION = "createTokenFromTransaction"


class Fragment(str, Enum):
    """Response fragments, valued by their attribute on ServiceResult."""
    COMMON = "common_response"
    ORDER = "order_response"
    PAYMENT = "payment_response"
    CARD = "card_response"
    AUTHORIZATION = "authorization_response"
    CAPTURE = "capture_response"
    CUSTOMER = "customer_response"
    EXTRA = "extra_response"
    THREE_DS = "three_ds_response"
    TOKEN = "token_response"
    SHOPPING_CART = "shopping_cart_response"
    FRAUD_MANAGEMENT = "fraud_management_response"
    MARK = "mark_response"
    SUBSCRIPTION = "subscription_response"

    @property
    def wire_key(self) -> str:
        if self is Fragment.THREE_DS:
            return "threeDSResponse"
        return to_camel(self.value)

    @property
    def model(self) -> Type[ResponseFragment]:
        return _FRAGMENT_MODELS[self]


_FRAGMENT_MODELS: Dict[Fragment, Type[ResponseFragment]] = {
    Fragment.COMMON: CommonResponse,
    Fragment.ORDER: OrderResponse,
    Fragment.PAYMENT: PaymentResponse,
    Fragment.CARD: CardResponse,
    Fragment.AUTHORIZATION: AuthorizationResponse,
    Fragment.CAPTURE: CaptureResponse,
    Fragment.CUSTOMER: CustomerResponse,
    Fragment.EXTRA: ExtraResponse,
    Fragment.THREE_DS: ThreeDSResponse,
    Fragment.TOKEN: TokenResponse,
    Fragment.SHOPPING_CART: ShoppingCartResponse,
    Fragment.FRAUD_MANAGEMENT: FraudManagementResponse,
    Fragment.MARK: MarkResponse,
    Fragment.SUBSCRIPTION: SubscriptionResponse,
}

_F = Fragment

_TRANSACTION_FRAGMENTS = (
    _F.COMMON, _F.PAYMENT, _F.ORDER, _F.CARD, _F.AUTHORIZATION, _F.CAPTURE,
    _F.CUSTOMER, _F.EXTRA, _F.FRAUD_MANAGEMENT, _F.MARK, _F.THREE_DS,
)

FRAGMENT_MAP: Mapping[OperationKind, Tuple[Fragment, ...]] = {
    OperationKind.CREATE_PAYMENT: _TRANSACTION_FRAGMENTS + (_F.SHOPPING_CART, _F.SUBSCRIPTION),
    # shopping cart not mapped for details/update
    OperationKind.GET_PAYMENT_DETAILS: _TRANSACTION_FRAGMENTS + (_F.SUBSCRIPTION,),
    OperationKind.UPDATE_PAYMENT: _TRANSACTION_FRAGMENTS + (_F.SUBSCRIPTION,),
    OperationKind.REFUND_PAYMENT: _TRANSACTION_FRAGMENTS,
    OperationKind.CREATE_TOKEN_FROM_TRANSACTION: _TRANSACTION_FRAGMENTS,
    OperationKind.GET_PAYMENT_UUID: (_F.COMMON, _F.PAYMENT),
    OperationKind.FIND_PAYMENTS: (_F.COMMON, _F.ORDER),
    OperationKind.CANCEL_PAYMENT: (_F.COMMON,),
    OperationKind.VALIDATE_PAYMENT: (_F.COMMON,),
}

_unmapped = set(OperationKind) - set(FRAGMENT_MAP)
if _unmapped:
    raise RuntimeError(f"FRAGMENT_MAP has no entry for {sorted(k.name for k in _unmapped)}")


class ServiceResult(BaseModel):
    """Normalized answer of any operation. Absent fragments are None."""

    model_config = ConfigDict(frozen=True)

    operation: OperationKind

    common_response: Optional[CommonResponse] = None
    order_response: Optional[OrderResponse] = None
    payment_response: Optional[PaymentResponse] = None
    card_response: Optional[CardResponse] = None
    authorization_response: Optional[AuthorizationResponse] = None
    capture_response: Optional[CaptureResponse] = None
    customer_response: Optional[CustomerResponse] = None
    extra_response: Optional[ExtraResponse] = None
    three_ds_response: Optional[ThreeDSResponse] = None
    token_response: Optional[TokenResponse] = None
    shopping_cart_response: Optional[ShoppingCartResponse] = None
    fraud_management_response: Optional[FraudManagementResponse] = None
    mark_response: Optional[MarkResponse] = None
    subscription_response: Optional[SubscriptionResponse] = None

    # HTTP session cookie of the call, kept for the 3-D Secure round trip
    session_id: Optional[str] = None
    mode: Optional[str] = None

    def populated_fragments(self) -> Tuple[Fragment, ...]:
        return tuple(f for f in Fragment if getattr(self, f.value) is not None)

    @property
    def redirect_acs_md(self) -> Optional[str]:
        """
        MD to send to the ACS, or None.

        Needs the session id and a three-DS fragment carrying a request id;
        a token that could not be decoded later is never returned.
        """
        request_id = self.three_ds_response.request_id if self.three_ds_response else None
        if not self.session_id or not request_id:
            return None
        try:
            return begin_challenge(self.session_id, request_id)
        except EncodingError as exc:
            logger.warning("No MD for %s result: %s", self.operation.value, exc)
            return None


def aggregate(
    kind: OperationKind,
    payload: Mapping[str, Any],
    session_id: Optional[str] = None,
    mode: Optional[str] = None,
) -> ServiceResult:
    """Copy the fragments `kind` declares in FRAGMENT_MAP out of a reply body."""
    values: Dict[str, Any] = {}
    for fragment in FRAGMENT_MAP[kind]:
        raw = payload.get(fragment.wire_key)
        if raw is None:
            continue
        try:
            values[fragment.value] = fragment.model.model_validate(raw)
        except ValidationError as exc:
            raise TransportError(
                f"Unexpected {fragment.wire_key} in {kind.value} reply",
                operation=kind.value,
                payload=raw,
            ) from exc

    return ServiceResult(operation=kind, session_id=session_id, mode=mode, **values)
