from .adapter import GatewayProvider, PaymentGateway
from .tripay_adapter import Tripay, TripayError
from .dispatcher import GatewayDispatcher, get_tripay_adapter

__all__ = [
    "GatewayProvider",
    "PaymentGateway",
    "Tripay",
    "TripayError",
    "GatewayDispatcher",
    "get_tripay_adapter",
]
