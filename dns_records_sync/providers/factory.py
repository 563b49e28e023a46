"""
Provider selection from configuration.
"""

import logging
from typing import Dict, Optional

from ..utils.domain_filter import DomainFilter
from .base_provider import DNSProvider
from .bind_provider import BINDProvider
from .inmemory_provider import InMemoryProvider

logger = logging.getLogger(__name__)

PROVIDERS = {
    "bind": BINDProvider,
    "inmemory": InMemoryProvider,
}


def get_provider(config: Dict, domain_filter: Optional[DomainFilter] = None) -> DNSProvider:
    """Get DNS provider based on configuration."""
    provider_name = config.get("default_provider", "inmemory")
    provider_config = (config.get("dns_providers") or {}).get(provider_name) or {}

    provider_class = PROVIDERS.get(provider_name)
    if provider_class is None:
        raise ValueError(
            f"Unknown provider '{provider_name}', expected one of: {', '.join(sorted(PROVIDERS))}"
        )

    logger.info(f"Using DNS provider '{provider_name}'")
    return provider_class(provider_config, domain_filter=domain_filter)
