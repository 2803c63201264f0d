"""
Payment gateway base class and interface.
Provides a uniform interface over multiple payment providers (Tripay, ...).
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Mapping, Optional, Union

from ..schemas import Channel, CreateTransaction, Transaction, TransactionItem


class GatewayProvider(str, Enum):
    """Supported payment providers."""
    TRIPAY = "tripay"


class PaymentGateway(ABC):
    """
    Base adapter for payment providers.
    All provider implementations must inherit from this class.
    """

    def __init__(self, fee_item_sku: Optional[str] = None):
        """
        Args:
            fee_item_sku: SKU used when a provider fee must be billed as its own line item
        """
        self._fee_item_sku = fee_item_sku

    @property
    def fee_item_sku(self) -> Optional[str]:
        return self._fee_item_sku

    @abstractmethod
    async def channels(self) -> List[Channel]:
        """
        List the payment channels currently offered by the provider.
        """
        pass

    @abstractmethod
    async def create(self, transaction: CreateTransaction) -> Transaction:
        """
        Create a transaction at the provider.

        Returns:
            Transaction carrying the provider reference, total amount
            (fees included) and at least one payment instruction
        """
        pass

    @abstractmethod
    async def get(self, payment_id: str) -> Transaction:
        """
        Fetch a transaction by provider reference. Has no side effects.
        """
        pass

    @abstractmethod
    async def verify_callback(
        self,
        body: Union[str, bytes],
        headers: Mapping[str, str],
    ) -> Transaction:
        """
        Authenticate a provider callback and parse it.

        Args:
            body: Raw request body, exactly as received
            headers: Request headers

        Raises:
            AuthenticationError: If the signature is missing or invalid
        """
        pass

    def fee_item(self, fee: int) -> Optional[TransactionItem]:
        """
        Line item representing the gateway fee, for providers that bill the
        fee as a separate item. None when no fee-item SKU is configured or
        the fee is zero.
        """
        if fee < 0:
            raise ValueError(f"fee must not be negative, got {fee}")
        if not self._fee_item_sku or fee == 0:
            return None
        return TransactionItem(sku=self._fee_item_sku, price=fee, quantity=1)

    def with_fee_item(self, items: List[TransactionItem], fee: int) -> List[TransactionItem]:
        """Copy of items with the fee line item appended when one applies."""
        item = self.fee_item(fee)
        return [*items, item] if item else list(items)

    def __repr__(self):
        return f"<{self.__class__.__name__}(provider={getattr(self, 'provider', 'unknown')})>"
