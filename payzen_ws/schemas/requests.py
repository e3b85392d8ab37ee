from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# ====== Request sections (wire objects) ======

class RequestSection(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CommonRequest(RequestSection):
    payment_source: Optional[str] = None
    submission_date: Optional[datetime] = None
    contract_number: Optional[str] = None
    comment: Optional[str] = None


class ThreeDSRequest(RequestSection):
    mode: Optional[str] = None  # DISABLED | ENABLED_CREATE | ENABLED_FINALIZE | MERCHANT_3DS
    request_id: Optional[str] = None
    pares: Optional[str] = None
    brand: Optional[str] = None
    enrolled: Optional[str] = None
    status: Optional[str] = None
    eci: Optional[str] = None
    xid: Optional[str] = None
    cavv: Optional[str] = None
    algorithm: Optional[str] = None


class PaymentRequest(RequestSection):
    amount: Optional[int] = None  # in cents
    currency: Optional[int] = None  # ISO 4217 numeric
    expected_capture_date: Optional[datetime] = None
    manual_validation: Optional[int] = None
    payment_option_code: Optional[str] = None
    transaction_id: Optional[str] = None


class OrderRequest(RequestSection):
    order_id: Optional[str] = None
    ext_info: Optional[List[Dict[str, str]]] = None


class CardRequest(RequestSection):
    number: Optional[str] = None
    scheme: Optional[str] = None
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None
    card_security_code: Optional[str] = Field(default=None, repr=False)
    card_holder_birth_day: Optional[date] = None
    payment_token: Optional[str] = None


class CustomerRequest(RequestSection):
    billing_details: Optional[Dict[str, Any]] = None
    shipping_details: Optional[Dict[str, Any]] = None
    extra_details: Optional[Dict[str, Any]] = None


class TechRequest(RequestSection):
    browser_user_agent: Optional[str] = None
    browser_accept: Optional[str] = None


class ShoppingCartRequest(RequestSection):
    cart_item_info: Optional[List[Dict[str, Any]]] = None


class QueryRequest(RequestSection):
    uuid: Optional[str] = None
    order_id: Optional[str] = None
    subscription_id: Optional[str] = None
    payment_token: Optional[str] = None


class LegacyTransactionKeyRequest(RequestSection):
    transaction_id: str
    creation_date: date  # only the day is significant
    sequence_number: int = 1  # always 1 for a single payment

    @field_validator("creation_date", mode="before")
    @classmethod
    def _day_only(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        return v


# ====== Operation requests (one per SDK call) ======

class OperationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreatePaymentRequest(OperationRequest):
    common_request: CommonRequest = Field(default_factory=CommonRequest)
    three_ds_request: Optional[ThreeDSRequest] = None
    payment_request: Optional[PaymentRequest] = None
    order_request: Optional[OrderRequest] = None
    card_request: Optional[CardRequest] = None
    customer_request: Optional[CustomerRequest] = None
    tech_request: Optional[TechRequest] = None
    shopping_cart_request: Optional[ShoppingCartRequest] = None

    @classmethod
    def for_card(
        cls,
        amount: int,
        currency: int,
        card_number: str,
        expiry_month: int,
        expiry_year: int,
        cvv: str,
        order_id: Optional[str] = None,
    ) -> "CreatePaymentRequest":
        """Card payment from the handful of parameters most shops need."""
        return cls(
            payment_request=PaymentRequest(amount=amount, currency=currency),
            order_request=OrderRequest(order_id=order_id),
            card_request=CardRequest(
                number=card_number,
                scheme="VISA",  # reclassified by the service
                expiry_month=expiry_month,
                expiry_year=expiry_year,
                card_security_code=cvv,
            ),
        )

    def to_body(self) -> Dict[str, Any]:
        sections = {
            "commonRequest": self.common_request,
            "threeDSRequest": self.three_ds_request,
            "paymentRequest": self.payment_request,
            "orderRequest": self.order_request,
            "cardRequest": self.card_request,
            "customerRequest": self.customer_request,
            "techRequest": self.tech_request,
            "shoppingCartRequest": self.shopping_cart_request,
        }
        return {key: section.to_wire() for key, section in sections.items() if section is not None}


class ThreeDSFinalizeRequest(OperationRequest):
    """What the browser brings back from the ACS: the PaRes and our MD."""
    pares: str
    md: str


class UpdatePaymentRequest(OperationRequest):
    uuid: str
    amount: Optional[int] = None
    currency: Optional[int] = None
    expected_capture_date: Optional[datetime] = None
    comment: Optional[str] = None

    @model_validator(mode="after")
    def _something_to_update(self) -> "UpdatePaymentRequest":
        if (self.amount is None) != (self.currency is None):
            raise ValueError("amount and currency must be given together")
        if self.amount is None and self.expected_capture_date is None:
            raise ValueError("nothing to update: give amount/currency or expected_capture_date")
        return self


class ValidatePaymentRequest(OperationRequest):
    uuid: str
    comment: Optional[str] = None


class RefundPaymentRequest(OperationRequest):
    uuid: str
    amount: int
    currency: int
    comment: Optional[str] = None


class CreateTokenRequest(OperationRequest):
    uuid: str
    comment: Optional[str] = None
