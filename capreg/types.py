from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class ErrorCategory(str, Enum):
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    INVALID_PLUGIN = "invalid_plugin"
    FROZEN = "frozen"
    DISCOVERY = "discovery"
    UNKNOWN = "unknown"


class DuplicatePolicy(str, Enum):
    ERROR = "error"
    REPLACE = "replace"


@dataclass
class RegistryError(Exception):
    message: str
    name: Optional[str] = None
    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __str__(self) -> str:
        return f"{self.category.value}: {self.message}"


@dataclass
class NotFoundError(RegistryError):
    available: List[str] = field(default_factory=list)
    category: ErrorCategory = ErrorCategory.NOT_FOUND


@dataclass
class DuplicateNameError(RegistryError):
    category: ErrorCategory = ErrorCategory.DUPLICATE


@dataclass
class InvalidPluginError(RegistryError):
    missing: List[str] = field(default_factory=list)
    category: ErrorCategory = ErrorCategory.INVALID_PLUGIN


@dataclass
class RegistryFrozenError(RegistryError):
    category: ErrorCategory = ErrorCategory.FROZEN


@dataclass
class DiscoveryError(RegistryError):
    """
    Raised by a plugin source when a reference cannot be imported or resolved.

    `reference` is the offending "module:attribute" string or module name.
    """
    reference: Optional[str] = None
    category: ErrorCategory = ErrorCategory.DISCOVERY


@dataclass
class RegistryEntry:
    name: str
    plugin: Any
    source: Optional[str] = None  # e.g., "tag:app.bank", "config:plugins.yaml"
