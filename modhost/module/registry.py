"""
Module Registration Table.

Modules announce themselves when their Python module is imported:

    from modhost.module import Module, register_module

    @register_module
    class Foo(Module):
        ...

The discovery engine imports the members of a package and then asks the
registry which factories were declared by each imported module. A factory
is either a class or a zero-argument callable returning a Module.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


class RegistrationError(Exception):
    """Raised when a factory cannot be registered."""

    pass


@dataclass(frozen=True)
class Factory:
    """
    A registered module factory.

    Attributes:
        module: Dotted name of the Python module declaring the factory
        qualname: Qualified name of the factory inside that module
        target: The class or callable itself
    """

    module: str
    qualname: str
    target: Callable[[], Any]

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.qualname}"

    @property
    def is_nested(self) -> bool:
        """True for factories defined inside a class or function body."""
        return "." in self.qualname or "<" in self.qualname


class ModuleRegistry:
    """Table of module factories, grouped by declaring module."""

    def __init__(self):
        self._factories: dict[str, list[Factory]] = {}

    def register(self, target: Callable[[], Any], module: str | None = None):
        """
        Register a factory.

        Args:
            target: Class or zero-argument callable
            module: Declaring module name (default: target.__module__)

        Returns:
            target, unchanged, so this can be used as a decorator

        Raises:
            RegistrationError: If target is not callable, or another factory
                is already registered under the same qualified name
        """
        if not callable(target):
            raise RegistrationError(f"Module factory must be callable: {target!r}")

        factory = Factory(
            module=module or target.__module__,
            qualname=getattr(target, "__qualname__", type(target).__qualname__),
            target=target,
        )

        entries = self._factories.setdefault(factory.module, [])
        for existing in entries:
            if existing.qualname != factory.qualname:
                continue
            if existing.target is target:
                return target
            raise RegistrationError(
                f"Factory already registered: {factory.qualified_name}"
            )

        entries.append(factory)
        return target

    def factories_in(self, module: str) -> list[Factory]:
        """Get factories declared by a module, in registration order."""
        return list(self._factories.get(module, []))

    def unregister_module(self, module: str) -> None:
        """Forget every factory declared by a module."""
        self._factories.pop(module, None)

    def __contains__(self, module: str) -> bool:
        return module in self._factories

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._factories.values())


_registry = ModuleRegistry()


def get_registry() -> ModuleRegistry:
    """Get the process-wide registry used by @register_module."""
    return _registry


def register_module(target=None, *, module: str | None = None):
    """
    Register a module factory in the process-wide registry.

    Usable bare (@register_module) or with arguments
    (@register_module(module="pkg.mod")).
    """
    if target is None:
        return lambda t: _registry.register(t, module=module)
    return _registry.register(target, module=module)
