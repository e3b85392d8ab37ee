from .requests import (
    CardRequest,
    CommonRequest,
    CreatePaymentRequest,
    CreateTokenRequest,
    CustomerRequest,
    LegacyTransactionKeyRequest,
    OrderRequest,
    PaymentRequest,
    QueryRequest,
    RefundPaymentRequest,
    ShoppingCartRequest,
    TechRequest,
    ThreeDSFinalizeRequest,
    ThreeDSRequest,
    UpdatePaymentRequest,
    ValidatePaymentRequest,
)

__all__ = [
    "CardRequest",
    "CommonRequest",
    "CreatePaymentRequest",
    "CreateTokenRequest",
    "CustomerRequest",
    "LegacyTransactionKeyRequest",
    "OrderRequest",
    "PaymentRequest",
    "QueryRequest",
    "RefundPaymentRequest",
    "ShoppingCartRequest",
    "TechRequest",
    "ThreeDSFinalizeRequest",
    "ThreeDSRequest",
    "UpdatePaymentRequest",
    "ValidatePaymentRequest",
]
