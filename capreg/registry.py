from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Generic, Iterator, List, Mapping, Optional, Tuple, Type, TypeVar

from ._logging import get_component_logger
from .interface import Capability, required_operations, validate_plugin
from .types import (
    DuplicateNameError,
    DuplicatePolicy,
    NotFoundError,
    RegistryEntry,
    RegistryFrozenError,
)

P = TypeVar("P", bound=Capability)


class RegistryView(Generic[P]):
    """
    Restartable view over (name, plugin) pairs in registration order.

    Bound to the snapshot current when it was created; iterating it again
    walks the same snapshot.
    """

    def __init__(self, snapshot: Mapping[str, RegistryEntry]):
        self._snapshot = snapshot

    def __iter__(self) -> Iterator[Tuple[str, P]]:
        for entry in self._snapshot.values():
            yield entry.name, entry.plugin

    def entries(self) -> Iterator[RegistryEntry]:
        """Full entries (name, plugin, source) from the same snapshot."""
        return iter(self._snapshot.values())

    def __len__(self) -> int:
        return len(self._snapshot)


class PluginRegistry(ABC, Generic[P]):
    @abstractmethod
    def register(self, plugin: P, source: Optional[str] = None) -> RegistryEntry:
        ...

    @abstractmethod
    def lookup(self, name: str) -> P:
        """
        Raises NotFoundError when nothing is registered under `name`.
        """
        ...

    @abstractmethod
    def list_all(self) -> RegistryView[P]:
        ...


class CapabilityRegistry(PluginRegistry[P]):
    """
    Name -> plugin registry for one capability interface.

    Writes are serialized and publish a fresh read-only snapshot, so lookups
    never take a lock and never observe a half-applied registration.

    Usage:
        registry = CapabilityRegistry(BankProvider)
        registry.register(AcmeBank(), source="manual")
        registry.freeze()

        registry.lookup("acme_bank").deposit(100)
        for name, bank in registry.list_all():
            ...
    """

    def __init__(
        self,
        interface: Type[P],
        *,
        on_duplicate: DuplicatePolicy = DuplicatePolicy.ERROR,
        logger: Optional[Any] = None,
    ):
        # Fails early on a non-Capability interface
        required_operations(interface)
        self._interface = interface
        self._on_duplicate = DuplicatePolicy(on_duplicate)
        self._snapshot: Mapping[str, RegistryEntry] = MappingProxyType({})
        self._write_lock = threading.Lock()
        self._frozen = False
        self._logger = get_component_logger("CapabilityRegistry", logger).bind(
            interface=interface.__name__
        )

    @property
    def interface(self) -> Type[P]:
        return self._interface

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, plugin: P, source: Optional[str] = None) -> RegistryEntry:
        """
        Validate `plugin` and insert it under its own `get_name()`.

        Raises:
            InvalidPluginError: plugin does not satisfy the interface
            DuplicateNameError: name taken and policy is ERROR
            RegistryFrozenError: registry was frozen
        """
        name = validate_plugin(plugin, self._interface)
        entry = RegistryEntry(name=name, plugin=plugin, source=source)

        with self._write_lock:
            if self._frozen:
                raise RegistryFrozenError(
                    message=f"Registry is frozen; cannot register '{name}'",
                    name=name,
                )

            current = self._snapshot
            previous = current.get(name)
            if previous is not None and self._on_duplicate == DuplicatePolicy.ERROR:
                raise DuplicateNameError(
                    message=(
                        f"Plugin name '{name}' already registered "
                        f"(existing source: {previous.source or 'unknown'})"
                    ),
                    name=name,
                )

            updated: Dict[str, RegistryEntry] = dict(current)
            updated[name] = entry
            self._snapshot = MappingProxyType(updated)

        if previous is not None:
            self._logger.warning(
                "plugin_replaced",
                name=name,
                source=source,
                previous_source=previous.source,
            )
        else:
            self._logger.info("plugin_registered", name=name, source=source)
        return entry

    def lookup(self, name: str) -> P:
        return self.entry(name).plugin

    def entry(self, name: str) -> RegistryEntry:
        snapshot = self._snapshot
        entry = snapshot.get(name)
        if entry is None:
            self._logger.debug("plugin_lookup_miss", name=name)
            raise NotFoundError(
                message=f"No plugin registered under '{name}'",
                name=name,
                available=list(snapshot.keys()),
            )
        return entry

    def list_all(self) -> RegistryView[P]:
        return RegistryView(self._snapshot)

    def names(self) -> List[str]:
        return list(self._snapshot.keys())

    def freeze(self) -> None:
        """End the initialization phase; further register() calls fail."""
        with self._write_lock:
            if self._frozen:
                return
            self._frozen = True
        self._logger.info("registry_frozen", plugin_count=len(self._snapshot))

    def __contains__(self, name: object) -> bool:
        return name in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)
