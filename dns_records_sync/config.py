"""
Configuration loading and assembly of the reconciliation pipeline.

Configuration comes from a YAML file merged over DEFAULT_CONFIG; the CLI
overrides single keys afterwards. The build_* functions turn the resulting
dict into sources, registry, policies and controller.
"""

import copy
import logging
import sys
from typing import Dict, List

import yaml

from .core.controller import Controller
from .core.policy import Policy, SyncPolicy, UpsertOnlyPolicy
from .providers.factory import get_provider
from .registry.base_registry import Registry
from .registry.noop_registry import NoopRegistry
from .registry.txt_registry import TXTRegistry
from .sources.base_source import Source
from .sources.csv import CSVSource
from .sources.filter_source import FilterSource
from .sources.multi_source import MultiSource
from .sources.static_source import StaticSource
from .utils.domain_filter import DomainFilter
from .utils.validators import parse_cidr_list, parse_dns_ignore_list

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "sources": [],
    "default_provider": "inmemory",
    "dns_providers": {"inmemory": {}},
    "domain_filter": [],
    "basedomain_filter": [],
    "cidr_ignore": [],
    "dns_ignore": [],
    "policy": "sync",
    "registry": "txt",
    "txt_owner_id": "default",
    "txt_prefix": "",
    "interval": 60,
    "once": False,
    "dry_run": False,
    "cleanup": False,
    "logging": {"level": "INFO"},
}

POLICIES = {
    "sync": SyncPolicy(),
    "upsert-only": UpsertOnlyPolicy(),
}

REGISTRIES = ("txt", "noop")


def get_default_config() -> Dict:
    """Return default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(config_path: str) -> Dict:
    """
    Load configuration from YAML file, merged over the defaults.

    Raises:
        ValueError: If the file is not valid YAML or not a mapping
    """
    config = get_default_config()
    try:
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f) or {}
        logger.info(f"Configuration loaded from {config_path}")
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return config
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing config file {config_path}: {e}")

    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    config.update(loaded)
    return config


def config_logger(config: Dict):
    """Configure logging."""
    logging_config = config.get("logging") or {}
    log_level = str(logging_config.get("level", "INFO")).upper()
    log_file = logging_config.get("file")

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def get_policies(config: Dict) -> List[Policy]:
    """Resolve the configured policy name, or list of names, to policies."""
    names = config.get("policy", "sync")
    if isinstance(names, str):
        names = [names]

    policies = []
    for name in names:
        if name not in POLICIES:
            raise ValueError(
                f"Unknown policy '{name}', expected one of: {', '.join(sorted(POLICIES))}"
            )
        policies.append(POLICIES[name])
    return policies


def build_source(config: Dict) -> Source:
    """Build the filtered source of desired endpoints."""
    sources = []
    for entry in config.get("sources") or []:
        source_type = entry.get("type")
        if source_type == "csv":
            sources.append(CSVSource(entry["path"]))
        elif source_type == "static":
            sources.append(StaticSource.from_config(entry.get("endpoints")))
        else:
            raise ValueError(f"Unknown source type '{source_type}'")

    if not sources:
        raise ValueError("At least one source must be configured")

    source = sources[0] if len(sources) == 1 else MultiSource(sources)

    return FilterSource(
        source,
        domain_filter=DomainFilter(config.get("basedomain_filter")),
        cidr_ignore=parse_cidr_list(config.get("cidr_ignore")),
        dns_ignore=parse_dns_ignore_list(config.get("dns_ignore")),
    )


def build_registry(config: Dict) -> Registry:
    """Build the registry wrapping the configured provider."""
    registry_name = config.get("registry", "txt")
    if registry_name not in REGISTRIES:
        raise ValueError(
            f"Unknown registry '{registry_name}', expected one of: {', '.join(REGISTRIES)}"
        )

    provider = get_provider(config, DomainFilter(config.get("domain_filter")))

    if registry_name == "noop":
        return NoopRegistry(provider)
    return TXTRegistry(
        provider,
        owner_id=config.get("txt_owner_id", "default"),
        prefix=config.get("txt_prefix", ""),
    )


def build_controller(config: Dict, output_file: str = None) -> Controller:
    """Assemble a controller from configuration."""
    cleanup = config.get("cleanup", False)
    return Controller(
        # Cleanup plans against an empty desired set
        source=None if cleanup else build_source(config),
        registry=build_registry(config),
        policies=get_policies(config),
        interval=float(config.get("interval", 60)),
        dry_run=bool(config.get("dry_run", False)),
        output_file=output_file,
    )
