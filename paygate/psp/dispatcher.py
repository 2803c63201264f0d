"""Gateway dispatcher - routes to the correct adapter based on provider name."""
from typing import Dict, Optional, Tuple, Type

from ..config.settings import Settings, settings as default_settings
from ..errors import ConfigurationError
from .adapter import GatewayProvider, PaymentGateway
from .tripay_adapter import Tripay


class GatewayDispatcher:
    """
    Dispatcher that selects and initializes the correct gateway adapter.
    Loads credentials from settings.
    """

    _registry: Dict[str, Type[PaymentGateway]] = {
        GatewayProvider.TRIPAY.value: Tripay,
    }
    # provider -> (settings the adapter was built from, adapter)
    _adapters: Dict[str, Tuple[Settings, PaymentGateway]] = {}

    @classmethod
    def get_adapter(cls, provider: Optional[str] = None, settings: Optional[Settings] = None) -> PaymentGateway:
        """
        Get gateway adapter for the given provider.

        Args:
            provider: Provider name (tripay, ...). Defaults to PAYGATE_DEFAULT_GATEWAY
            settings: Settings to build the adapter from. Defaults to the module settings

        Returns:
            Initialized gateway adapter, reused while the same settings object is passed

        Raises:
            ConfigurationError: If provider is not supported or credentials missing
        """
        settings = settings or default_settings
        provider = (provider or settings.PAYGATE_DEFAULT_GATEWAY).strip().lower()

        # Return cached adapter if it was built from these settings
        cached = cls._adapters.get(provider)
        if cached is not None and cached[0] is settings:
            return cached[1]

        adapter_class = cls._registry.get(provider)
        if adapter_class is None:
            supported = ", ".join(sorted(cls._registry))
            raise ConfigurationError(f"Unsupported payment gateway: {provider}. Supported gateways: {supported}")

        adapter = adapter_class.from_settings(settings)

        # Cache adapter
        cls._adapters = {**cls._adapters, provider: (settings, adapter)}
        return adapter

    @classmethod
    def register(cls, name: str, adapter_class: type):
        """Register an additional gateway adapter class."""
        if not (isinstance(adapter_class, type) and issubclass(adapter_class, PaymentGateway)):
            raise ConfigurationError("Gateway class must extend PaymentGateway")
        if not callable(getattr(adapter_class, "from_settings", None)):
            raise ConfigurationError("Gateway class must provide from_settings()")
        name = name.strip().lower()
        cls._registry = {**cls._registry, name: adapter_class}
        cls._adapters = {k: v for k, v in cls._adapters.items() if k != name}

    @classmethod
    def unregister(cls, name: str):
        """Remove a registered gateway and any adapter cached for it."""
        name = name.strip().lower()
        cls._registry = {k: v for k, v in cls._registry.items() if k != name}
        cls._adapters = {k: v for k, v in cls._adapters.items() if k != name}

    @classmethod
    def available(cls):
        """List registered provider names."""
        return sorted(cls._registry)

    @classmethod
    def clear_cache(cls):
        """Clear cached adapters (useful for testing)."""
        cls._adapters = {}


def get_tripay_adapter() -> Tripay:
    """Get Tripay adapter."""
    return GatewayDispatcher.get_adapter(GatewayProvider.TRIPAY.value)
