"""Tripay payment gateway adapter.

Supports Tripay closed payments with customer-borne fees.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from ..config.settings import Settings
from ..errors import AuthenticationError, ConfigurationError, FormatError, ProviderError
from ..hashing import HMACSigner
from ..logging_config import get_logger
from ..schemas import (
    Channel,
    ChannelCategory,
    ChannelFee,
    CreateTransaction,
    Customer,
    Payment,
    PaymentType,
    Transaction,
    TransactionItem,
)
from ..utils import USER_AGENT
from .adapter import GatewayProvider, PaymentGateway

logger = get_logger(__name__)

TRIPAY_SANDBOX_URL = "https://tripay.co.id/api-sandbox/"
TRIPAY_PRODUCTION_URL = "https://tripay.co.id/api/"

CALLBACK_SIGNATURE_HEADER = "X-Callback-Signature"

CHANNEL_GROUPS = {
    "Virtual Account": ChannelCategory.VIRTUAL_ACCOUNT,
    "Convenience Store": ChannelCategory.STORE,
    "E-Wallet": ChannelCategory.E_WALLET,
}


class TripayError(ProviderError):
    """Error response from the Tripay API."""


def channel_category(group: Optional[str]) -> ChannelCategory:
    return CHANNEL_GROUPS.get(group, ChannelCategory.UNKNOWN)


def channel_from_tripay(data: Dict[str, Any]) -> Channel:
    """Map a Tripay payment-channel object to a Channel."""
    try:
        fee_customer = data.get("fee_customer") or {}
        return Channel(
            id=data["code"],
            name=data["name"],
            category=channel_category(data.get("group")),
            fee=ChannelFee(
                flat=fee_customer.get("flat") or 0,
                percent=fee_customer.get("percent") or 0,
                min=data.get("minimum_fee") or 0,
                max=data.get("maximum_fee") or 0,
            ),
            image_url=data.get("icon_url"),
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise FormatError(f"Malformed Tripay channel: {e}")


def find_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup that leaves values untouched."""
    name = name.lower()
    return next((v for k, v in headers.items() if k.lower() == name), None)


def transaction_from_tripay(data: Dict[str, Any]) -> Transaction:
    """Map a Tripay transaction object (create, detail or callback) to a Transaction."""
    try:
        method = data["payment_method"]
        if "qris" in method.lower():
            payment = Payment(name="qris", type=PaymentType.URL, data=data.get("qr_url"))
        elif data.get("pay_url"):
            payment = Payment(name=method.lower(), type=PaymentType.URL, data=data["pay_url"])
        else:
            payment = Payment(name=method.lower(), type=PaymentType.CODE, data=data.get("pay_code"))

        name = data.get("customer_name")
        email = data.get("customer_email")
        customer = None
        if name or email:
            customer = Customer(name=name or "", email=email or "", phone=data.get("customer_phone"))

        return Transaction(
            id=data["merchant_ref"],
            payment_id=data["reference"],
            amount=data["amount"],
            items=[
                TransactionItem(sku=item["name"], price=item["price"], quantity=item["quantity"])
                for item in data.get("order_items") or []
            ],
            customer=customer,
            state=data["status"],
            payments=[payment],
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise FormatError(f"Malformed Tripay transaction: {e}")


class Tripay(PaymentGateway):
    """Tripay gateway adapter."""

    provider = GatewayProvider.TRIPAY

    def __init__(
        self,
        merchant_code: str,
        api_key: str,
        private_key: str,
        base_url: Optional[str] = None,
        production: bool = False,
        fee_item_sku: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Tripay adapter.

        Args:
            merchant_code: Tripay merchant code, part of every create signature
            api_key: Bearer token authenticating each request
            private_key: Secret for signing requests and verifying callbacks
            base_url: Explicit API base URL; wins over the production flag
            production: Use the production API instead of the sandbox
            fee_item_sku: SKU for a synthesized fee line item
            client: Shared httpx client; a short-lived one is opened per call otherwise
        """
        super().__init__(fee_item_sku)
        missing = [
            name for name, value in (
                ("merchant_code", merchant_code),
                ("api_key", api_key),
                ("private_key", private_key),
            ) if not value
        ]
        if missing:
            raise ConfigurationError(f"Tripay not configured: missing {', '.join(missing)}")

        if base_url:
            base = str(base_url)
            self._base_url = base if base.endswith("/") else base + "/"
        elif production:
            self._base_url = TRIPAY_PRODUCTION_URL
        else:
            self._base_url = TRIPAY_SANDBOX_URL
        self._api_key = api_key
        self._merchant_code = merchant_code
        self._signer = HMACSigner("sha256", private_key)
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "Tripay":
        return cls(
            merchant_code=settings.TRIPAY_MERCHANT_CODE,
            api_key=settings.TRIPAY_APIKEY,
            private_key=settings.TRIPAY_PRIVATE_KEY,
            base_url=settings.TRIPAY_BASE_URL,
            production=settings.TRIPAY_PRODUCTION,
            fee_item_sku=settings.TRIPAY_FEE_ITEM_SKU,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def merchant_code(self) -> str:
        return self._merchant_code

    async def _request(
        self,
        method: str,
        path: str,
        json_body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = httpx.URL(self._base_url).join(path)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "User-Agent": USER_AGENT,
        }
        logger.debug("tripay_request", method=method, path=path)

        if self._client is not None:
            r = await self._client.request(method, url, json=json_body, params=params, headers=headers)
        else:
            async with httpx.AsyncClient() as client:
                r = await client.request(method, url, json=json_body, params=params, headers=headers)

        try:
            body = r.json()
        except ValueError:
            body = None

        if r.is_error or not isinstance(body, dict) or not body.get("success"):
            if r.is_success and not isinstance(body, dict):
                raise FormatError(f"Unexpected Tripay response body for {path}")
            message = (body.get("message") if isinstance(body, dict) else None) or "unknown error"
            logger.warning(
                "tripay_request_failed",
                method=method,
                path=path,
                status_code=r.status_code,
                message=message,
            )
            raise TripayError(message, status_code=r.status_code, response=body if isinstance(body, dict) else None)
        return body.get("data")

    async def channels(self) -> List[Channel]:
        """List Tripay payment channels."""
        data = await self._request("GET", "merchant/payment-channel")
        return [channel_from_tripay(ch) for ch in data or []]

    def create_signature(self, merchant_ref: str, amount: int) -> str:
        # Tripay recomputes this exact concatenation, no delimiters
        return self._signer.sign(f"{self._merchant_code}{merchant_ref}{amount}")

    async def create(self, transaction: CreateTransaction) -> Transaction:
        """Create a Tripay closed-payment transaction."""
        amount = transaction.amount
        customer = transaction.customer
        payload = {
            "method": transaction.channel,
            "merchant_ref": transaction.id,
            "amount": amount,
            "order_items": [
                {"name": item.sku, "price": item.price, "quantity": item.quantity}
                for item in transaction.items
            ],
            "signature": self.create_signature(transaction.id, amount),
        }
        if customer:
            payload["customer_name"] = customer.name
            payload["customer_email"] = customer.email
            if customer.phone:
                payload["customer_phone"] = customer.phone
        data = await self._request("POST", "transaction/create", json_body=payload)
        return transaction_from_tripay(data)

    async def get(self, payment_id: str) -> Transaction:
        """Fetch a Tripay transaction by reference."""
        data = await self._request("GET", "transaction/detail", params={"reference": payment_id})
        return transaction_from_tripay(data)

    async def verify_callback(
        self,
        body: Union[str, bytes],
        headers: Mapping[str, str],
    ) -> Transaction:
        """Verify the X-Callback-Signature of a raw callback body, then parse it."""
        signature = find_header(headers, CALLBACK_SIGNATURE_HEADER)
        if not signature:
            logger.warning("tripay_callback_signature_missing")
            raise AuthenticationError(f'missing signature in "{CALLBACK_SIGNATURE_HEADER}" header')
        if not self._signer.verify(body, signature):
            logger.warning("tripay_callback_signature_invalid")
            raise AuthenticationError(f'invalid signature in "{CALLBACK_SIGNATURE_HEADER}" header')

        try:
            data = json.loads(body)
        except ValueError as e:
            raise FormatError(f"Callback body is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise FormatError("Callback body must be a JSON object")
        return transaction_from_tripay(data)
