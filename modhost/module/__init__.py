"""
modhost Module System - discovery, instantiation and lifecycle of modules.

This package handles:
- The Module contract every unit implements
- Factory registration (@register_module)
- Resolving package descriptors to archives
- Discovering and instantiating modules in those archives
- The enablement registry and the module manager
"""

from modhost.module.contract import Module, Phase
from modhost.module.descriptor import DescriptorError, PackageDescriptor, parse_descriptor
from modhost.module.manager import ModuleError, ModuleManager, PhaseError
from modhost.module.registry import (
    ModuleRegistry,
    RegistrationError,
    get_registry,
    register_module,
)
from modhost.module.source import NotFoundError, SourceError

__all__ = [
    "DescriptorError",
    "Module",
    "ModuleError",
    "ModuleManager",
    "ModuleRegistry",
    "NotFoundError",
    "PackageDescriptor",
    "Phase",
    "PhaseError",
    "RegistrationError",
    "SourceError",
    "get_registry",
    "parse_descriptor",
    "register_module",
]
