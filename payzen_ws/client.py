import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .callbacks.dispatcher import ResponseCallback, ResponseDispatcher
from .result import OperationKind, ServiceResult, aggregate
from .schemas.requests import (
    CommonRequest,
    CreatePaymentRequest,
    CreateTokenRequest,
    LegacyTransactionKeyRequest,
    PaymentRequest,
    QueryRequest,
    RefundPaymentRequest,
    ThreeDSFinalizeRequest,
    ThreeDSRequest,
    UpdatePaymentRequest,
    ValidatePaymentRequest,
)
from .session import resume_challenge
from .settings import Settings
from .transport.credentials import ConfigOverride, Credentials
from .transport.factory import ClientFactory, ServicePort

logger = logging.getLogger(__name__)


class PaymentClient:
    """
    PayZen web services v5, payment operations.

    Every operation takes one request object and three optional keyword
    arguments:
      - config: per-call override of the shop credentials/endpoint
        (keys as in the PayZen properties file: shopId, shopKey, mode, ...)
      - on_response: callback given the result before it is returned;
        its failures are logged and never change the result
      - headers: extra HTTP headers for the call; they never replace the
        signed shopId/requestId/timestamp/mode/authToken block

    The client holds no per-call state, so one instance can serve concurrent
    calls with different overrides.
    """

    def __init__(
        self,
        defaults: Credentials,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.factory = ClientFactory(defaults, transport=transport)
        self.dispatcher = ResponseDispatcher()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "PaymentClient":
        return cls(Credentials.from_settings(settings), transport=transport)

    # ---- plumbing ----
    async def _run(
        self,
        port: ServicePort,
        kind: OperationKind,
        body: Dict[str, Any],
        session_cookie: Optional[str] = None,
        keep_session: bool = False,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        reply = await port.call(kind.value, body, session_cookie=session_cookie, headers=headers)
        session_id = None
        if keep_session:
            session_id = session_cookie or reply.session_cookie
        return aggregate(kind, reply.payload, session_id=session_id, mode=port.mode)

    async def _finish(self, on_response: Optional[ResponseCallback], result: ServiceResult) -> ServiceResult:
        return await self.dispatcher.dispatch(on_response, result)

    async def _uuid_from_legacy_key(
        self,
        port: ServicePort,
        key: LegacyTransactionKeyRequest,
        headers: Optional[Mapping[str, str]] = None,
    ):
        key_result = await self._run(
            port, OperationKind.GET_PAYMENT_UUID, {"legacyTransactionKeyRequest": key.to_wire()},
            headers=headers,
        )
        payment = key_result.payment_response
        return (payment.transaction_uuid if payment else None), key_result

    # ---- create ----
    async def create(
        self,
        request: CreatePaymentRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        """
        createPayment. When the card is enrolled in 3-D Secure, the result's
        `redirect_acs_md` is the MD to post to the ACS with the PaReq.
        """
        port = self.factory.build(config)
        result = await self._run(
            port, OperationKind.CREATE_PAYMENT, request.to_body(), keep_session=True, headers=headers
        )
        return await self._finish(on_response, result)

    async def create_3ds(
        self,
        request: ThreeDSFinalizeRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        """Finalise a 3-D Secure payment once the shopper is back from the ACS."""
        session_cookie, request_id = resume_challenge(request.md)
        port = self.factory.build(config)

        finalize = CreatePaymentRequest(
            three_ds_request=ThreeDSRequest(
                mode="ENABLED_FINALIZE",
                pares=request.pares,
                request_id=request_id,
            )
        )
        # the suspended payment is only found within the first call's HTTP session
        result = await self._run(
            port,
            OperationKind.CREATE_PAYMENT,
            finalize.to_body(),
            session_cookie=session_cookie,
            keep_session=True,
            headers=headers,
        )
        return await self._finish(on_response, result)

    # ---- details / find ----
    async def details(
        self,
        query: QueryRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        if not query.uuid:
            raise ValueError("details needs the transaction uuid")
        port = self.factory.build(config)
        result = await self._details(port, query, headers)
        return await self._finish(on_response, result)

    async def _details(
        self,
        port: ServicePort,
        query: QueryRequest,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        body = {"queryRequest": query.to_wire(), "extendedResponseRequest": {}}
        return await self._run(port, OperationKind.GET_PAYMENT_DETAILS, body, headers=headers)

    async def details_by_legacy_key(
        self,
        key: LegacyTransactionKeyRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        """
        Details from (transactionId, creation day, sequence number).

        Resolves the uuid first; when the service returns none, the
        getPaymentUuid result itself is returned.
        """
        port = self.factory.build(config)
        uuid, key_result = await self._uuid_from_legacy_key(port, key, headers)
        if uuid:
            result = await self._details(port, QueryRequest(uuid=uuid), headers)
        else:
            logger.info("No uuid for legacy key %s", key.transaction_id)
            result = key_result
        return await self._finish(on_response, result)

    async def find(
        self,
        query: QueryRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        """Transactions of an order. Order ids are not unique, several may match."""
        if not query.order_id:
            raise ValueError("find needs an order id")
        port = self.factory.build(config)
        body = {"queryRequest": query.to_wire()}
        result = await self._run(port, OperationKind.FIND_PAYMENTS, body, headers=headers)
        return await self._finish(on_response, result)

    # ---- cancel ----
    async def cancel(
        self,
        query: QueryRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        if not query.uuid:
            raise ValueError("cancel needs the transaction uuid")
        port = self.factory.build(config)
        result = await self._cancel(port, query, headers)
        return await self._finish(on_response, result)

    async def _cancel(
        self,
        port: ServicePort,
        query: QueryRequest,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        body = {"commonRequest": CommonRequest().to_wire(), "queryRequest": query.to_wire()}
        return await self._run(port, OperationKind.CANCEL_PAYMENT, body, headers=headers)

    async def cancel_by_legacy_key(
        self,
        key: LegacyTransactionKeyRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        port = self.factory.build(config)
        uuid, key_result = await self._uuid_from_legacy_key(port, key, headers)
        if uuid:
            result = await self._cancel(port, QueryRequest(uuid=uuid), headers)
        else:
            logger.info("No uuid for legacy key %s", key.transaction_id)
            result = key_result
        return await self._finish(on_response, result)

    # ---- update / validate / refund / token ----
    async def update(
        self,
        request: UpdatePaymentRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        """New amount (with its currency) and/or expected capture date."""
        port = self.factory.build(config)
        body = {
            "commonRequest": CommonRequest(comment=request.comment).to_wire(),
            "queryRequest": QueryRequest(uuid=request.uuid).to_wire(),
            "paymentRequest": PaymentRequest(
                amount=request.amount,
                currency=request.currency,
                expected_capture_date=request.expected_capture_date,
            ).to_wire(),
        }
        result = await self._run(port, OperationKind.UPDATE_PAYMENT, body, headers=headers)
        return await self._finish(on_response, result)

    async def validate(
        self,
        request: ValidatePaymentRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        port = self.factory.build(config)
        body = {
            "commonRequest": CommonRequest(comment=request.comment).to_wire(),
            "queryRequest": QueryRequest(uuid=request.uuid).to_wire(),
        }
        result = await self._run(port, OperationKind.VALIDATE_PAYMENT, body, headers=headers)
        return await self._finish(on_response, result)

    async def refund(
        self,
        request: RefundPaymentRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        port = self.factory.build(config)
        body = {
            "commonRequest": CommonRequest(comment=request.comment).to_wire(),
            "paymentRequest": PaymentRequest(amount=request.amount, currency=request.currency).to_wire(),
            "queryRequest": QueryRequest(uuid=request.uuid).to_wire(),
        }
        result = await self._run(port, OperationKind.REFUND_PAYMENT, body, headers=headers)
        return await self._finish(on_response, result)

    async def create_token(
        self,
        request: CreateTokenRequest,
        *,
        config: Optional[ConfigOverride] = None,
        on_response: Optional[ResponseCallback] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ServiceResult:
        """Token from the card data of an existing transaction."""
        port = self.factory.build(config)
        body = {
            "commonRequest": CommonRequest(comment=request.comment).to_wire(),
            "cardRequest": {},
            "queryRequest": QueryRequest(uuid=request.uuid).to_wire(),
        }
        result = await self._run(port, OperationKind.CREATE_TOKEN_FROM_TRANSACTION, body, headers=headers)
        return await self._finish(on_response, result)
