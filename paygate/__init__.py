"""
Normalized abstraction over third-party payment gateway APIs.
"""

__version__ = "0.1.0"

from .errors import (
    PaymentError,
    FormatError,
    AuthenticationError,
    ConfigurationError,
    ProviderError,
)
from .hashing import HMACSigner, from_hex, to_hex
from .schemas import (
    Channel,
    ChannelCategory,
    ChannelFee,
    CreateTransaction,
    Customer,
    Payment,
    PaymentType,
    Transaction,
    TransactionItem,
    TransactionState,
)
from .utils import USER_AGENT, payment_is
from .psp import (
    GatewayDispatcher,
    GatewayProvider,
    PaymentGateway,
    Tripay,
    TripayError,
    get_tripay_adapter,
)

__all__ = [
    "__version__",
    # errors
    "PaymentError",
    "FormatError",
    "AuthenticationError",
    "ConfigurationError",
    "ProviderError",
    # hashing
    "HMACSigner",
    "from_hex",
    "to_hex",
    # models
    "Channel",
    "ChannelCategory",
    "ChannelFee",
    "CreateTransaction",
    "Customer",
    "Payment",
    "PaymentType",
    "Transaction",
    "TransactionItem",
    "TransactionState",
    # utils
    "USER_AGENT",
    "payment_is",
    # gateways
    "GatewayDispatcher",
    "GatewayProvider",
    "PaymentGateway",
    "Tripay",
    "TripayError",
    "get_tripay_adapter",
]
