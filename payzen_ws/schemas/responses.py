from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Fragments carry the fields the SDK reads; anything else the service sends is
# kept as extra attributes.


class ResponseFragment(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


class CommonResponse(ResponseFragment):
    response_code: Optional[int] = None
    response_code_detail: Optional[str] = None
    transaction_status_label: Optional[str] = None
    shop_id: Optional[str] = None
    payment_source: Optional[str] = None
    submission_date: Optional[str] = None
    contract_number: Optional[str] = None
    payment_token: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.response_code == 0


class OrderResponse(ResponseFragment):
    order_id: Optional[str] = None
    ext_info: List[Dict[str, Any]] = Field(default_factory=list)


class PaymentResponse(ResponseFragment):
    transaction_uuid: Optional[str] = None
    transaction_id: Optional[str] = None
    sequence_number: Optional[int] = None
    amount: Optional[int] = None
    currency: Optional[int] = None
    effective_amount: Optional[int] = None
    effective_currency: Optional[int] = None
    expected_capture_date: Optional[str] = None
    creation_date: Optional[str] = None
    operation_type: Optional[int] = None
    payment_type: Optional[str] = None
    external_transaction_id: Optional[str] = None


class CardResponse(ResponseFragment):
    number: Optional[str] = None
    scheme: Optional[str] = None
    brand: Optional[str] = None
    country: Optional[str] = None
    product_code: Optional[str] = None
    bank_code: Optional[str] = None
    expiry_month: Optional[int] = None
    expiry_year: Optional[int] = None


class AuthorizationResponse(ResponseFragment):
    mode: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[int] = None
    date: Optional[str] = None
    number: Optional[str] = None
    result: Optional[int] = None


class CaptureResponse(ResponseFragment):
    date: Optional[str] = None
    number: Optional[int] = None
    reconciliation_status: Optional[int] = None
    refunded_amount: Optional[int] = None
    refunded_currency: Optional[int] = None


class CustomerResponse(ResponseFragment):
    billing_details: Optional[Dict[str, Any]] = None
    shipping_details: Optional[Dict[str, Any]] = None
    extra_details: Optional[Dict[str, Any]] = None


class ExtraResponse(ResponseFragment):
    payment_option_code: Optional[str] = None
    payment_option_occ_number: Optional[int] = None


class ThreeDSRequestData(ResponseFragment):
    three_ds_enrolled: Optional[str] = Field(default=None, alias="threeDSEnrolled")
    three_ds_request_id: Optional[str] = Field(default=None, alias="threeDSRequestId")
    three_ds_acs_url: Optional[str] = Field(default=None, alias="threeDSAcsUrl")
    three_ds_encoded_pareq: Optional[str] = Field(default=None, alias="threeDSEncodedPareq")
    three_ds_brand: Optional[str] = Field(default=None, alias="threeDSBrand")


class ThreeDSResponse(ResponseFragment):
    authentication_request_data: Optional[ThreeDSRequestData] = None
    authentication_result_data: Optional[Dict[str, Any]] = None

    @property
    def request_id(self) -> Optional[str]:
        data = self.authentication_request_data
        return data.three_ds_request_id if data else None


class TokenResponse(ResponseFragment):
    token: Optional[str] = None
    creation_date: Optional[str] = None
    cancellation_date: Optional[str] = None


class ShoppingCartResponse(ResponseFragment):
    cart_item_info: List[Dict[str, Any]] = Field(default_factory=list)


class FraudManagementResponse(ResponseFragment):
    risk_control: List[Dict[str, Any]] = Field(default_factory=list)
    risk_analysis: List[Dict[str, Any]] = Field(default_factory=list)
    risk_assessments: Optional[Dict[str, Any]] = None


class MarkResponse(ResponseFragment):
    amount: Optional[int] = None
    currency: Optional[int] = None
    date: Optional[str] = None
    number: Optional[str] = None
    result: Optional[int] = None


class SubscriptionResponse(ResponseFragment):
    subscription_id: Optional[str] = None
    effect_date: Optional[str] = None
    cancel_date: Optional[str] = None
    initial_amount: Optional[int] = None
    initial_amount_number: Optional[int] = None
    past_payments_number: Optional[int] = None
    total_payments_number: Optional[int] = None
    rrule: Optional[str] = None
    description: Optional[str] = None
