"""Bank registry wiring.

Startup composition for the host: scan bank_plugins for BANK_TAG classes,
load banks other distributions advertise under the "bank_host.banks" entry
point group, add any plugins declared in the optional plugins file, then
freeze.

Usage:
    from bank_host.wiring import build_bank_registry
    registry = build_bank_registry()

    from bank_host.service import BankService
    service = BankService(registry)
"""

from typing import Any, List, Optional, Sequence

from capreg import (
    CapabilityRegistry,
    ConfigSource,
    EntryPointSource,
    PluginSource,
    RegistrySettings,
    TaggedSource,
    get_component_logger,
    populate,
)

from bank_contracts import BANK_TAG, BankProvider

# Packages scanned for tagged bank classes
PLUGIN_PACKAGES: List[str] = [
    "bank_plugins",
]

# Entry point group third-party distributions use to ship banks
ENTRY_POINT_GROUP = "bank_host.banks"


def default_sources(
    settings: RegistrySettings,
    packages: Optional[Sequence[str]] = None,
    logger: Optional[Any] = None,
) -> List[PluginSource]:
    sources: List[PluginSource] = [
        TaggedSource(BANK_TAG, packages=list(packages or PLUGIN_PACKAGES), logger=logger),
        EntryPointSource(ENTRY_POINT_GROUP),
    ]
    if settings.plugins_file:
        sources.append(ConfigSource(settings.plugins_file))
    return sources


def build_bank_registry(
    settings: Optional[RegistrySettings] = None,
    sources: Optional[Sequence[PluginSource]] = None,
    logger: Optional[Any] = None,
) -> CapabilityRegistry:
    """
    Build and populate the bank registry.

    Args:
        settings: Registry settings (default: RegistrySettings.from_env())
        sources: Override discovery sources (default: tag scan + plugins file)
        logger: Optional injected logger

    Returns:
        Populated registry, frozen unless settings.freeze is False
    """
    settings = settings or RegistrySettings.from_env()
    log = get_component_logger("bank_wiring", logger)

    registry: CapabilityRegistry = CapabilityRegistry(
        BankProvider,
        on_duplicate=settings.duplicate_policy,
        logger=logger,
    )
    if sources is None:
        sources = default_sources(settings, logger=logger)

    count = populate(registry, sources, freeze=settings.freeze, logger=logger)
    log.info("bank_registry_ready", bank_count=count, banks=registry.names())
    return registry
