"""
Capability interface base and runtime shape validation.

Every capability interface subclasses `Capability` and declares its domain
operations as abstract methods. Registration checks an object against the
interface's abstract methods, so duck-typed plugins with the full shape are
accepted as well as subclasses.

Usage:
    class BankProvider(Capability):
        @abstractmethod
        def deposit(self, amount: int) -> str:
            ...

    validate_plugin(AcmeBank(), BankProvider)  # returns "acme_bank"
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from typing import Any, Tuple, Type

from .types import InvalidPluginError


class Capability(ABC):
    @abstractmethod
    def get_name(self) -> str:
        """Stable key the plugin is registered under."""
        ...


def required_operations(interface: Type[Capability]) -> Tuple[str, ...]:
    """Return the sorted names of every abstract method on the interface."""
    if not (inspect.isclass(interface) and issubclass(interface, Capability)):
        raise TypeError(f"{interface!r} is not a Capability interface")
    ops = set(getattr(interface, "__abstractmethods__", ()))
    ops.add("get_name")
    return tuple(sorted(ops))


def validate_plugin(plugin: Any, interface: Type[Capability]) -> str:
    """
    Check that `plugin` satisfies `interface` and return its name.

    Raises:
        InvalidPluginError: if the object is a class, misses a required
            operation, or whose get_name() raises or reports an
            empty/non-string name.
    """
    if inspect.isclass(plugin):
        raise InvalidPluginError(
            message=f"Expected a plugin instance, got class {plugin.__name__}",
        )

    missing = [
        op for op in required_operations(interface)
        if not callable(getattr(plugin, op, None))
    ]
    if missing:
        raise InvalidPluginError(
            message=(
                f"{type(plugin).__name__} does not implement "
                f"{interface.__name__}: missing {', '.join(missing)}"
            ),
            missing=missing,
        )

    try:
        name = plugin.get_name()
    except Exception as exc:
        raise InvalidPluginError(
            message=f"{type(plugin).__name__}.get_name() raised {type(exc).__name__}: {exc}",
        ) from exc
    if not isinstance(name, str) or not name:
        raise InvalidPluginError(
            message=f"{type(plugin).__name__}.get_name() must return a non-empty string, got {name!r}",
        )
    return name
