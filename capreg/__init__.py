from .types import (
    ErrorCategory,
    DuplicatePolicy,
    RegistryEntry,
    RegistryError,
    NotFoundError,
    DuplicateNameError,
    InvalidPluginError,
    RegistryFrozenError,
    DiscoveryError,
)
from .interface import Capability, required_operations, validate_plugin
from .registry import CapabilityRegistry, PluginRegistry, RegistryView
from .discovery import (
    PluginSource,
    StaticSource,
    TaggedSource,
    ConfigSource,
    EntryPointSource,
    populate,
    resolve_reference,
    tagged,
    tags_of,
)
from .config import RegistrySettings
from ._logging import configure_logging, get_component_logger, get_logger

__all__ = [
    # Types
    "ErrorCategory",
    "DuplicatePolicy",
    "RegistryEntry",
    # Errors
    "RegistryError",
    "NotFoundError",
    "DuplicateNameError",
    "InvalidPluginError",
    "RegistryFrozenError",
    "DiscoveryError",
    # Interface
    "Capability",
    "required_operations",
    "validate_plugin",
    # Registry
    "CapabilityRegistry",
    "PluginRegistry",
    "RegistryView",
    # Discovery
    "PluginSource",
    "StaticSource",
    "TaggedSource",
    "ConfigSource",
    "EntryPointSource",
    "populate",
    "resolve_reference",
    "tagged",
    "tags_of",
    # Config / logging
    "RegistrySettings",
    "configure_logging",
    "get_component_logger",
    "get_logger",
]
