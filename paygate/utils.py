from typing import Optional, Union

from . import __version__
from .schemas import Payment, PaymentType

USER_AGENT = f"paygate/{__version__}"


def payment_is(payment: Payment, name: str, payment_type: Optional[Union[PaymentType, str]] = None) -> bool:
    """True when the payment has the given name and, if given, the given type."""
    return payment.name == name and (not payment_type or payment.type == payment_type)
