"""
Module Manager.

This module owns the table of loaded modules and drives their lifecycle.

Key features:
- Administrative options (list/enable/disable) that short-circuit loading
- Discovery across every declared package descriptor, in order
- First-wins registration by module name
- Enablement gate before init, failure isolation for init/prepare
- Ordered phase runs (cli, load, boot)
"""

import argparse
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from modhost.module.contract import Module, Phase
from modhost.module.descriptor import parse_descriptor
from modhost.module.discovery import Candidate, discover
from modhost.module.enablement import EnablementRegistry
from modhost.module.registry import ModuleRegistry
from modhost.module.source import resolve

if TYPE_CHECKING:
    from modhost.host import Host

logger = logging.getLogger(__name__)


class ModuleError(Exception):
    """Base exception for module manager errors."""

    pass


class PhaseError(ModuleError):
    """
    Raised when a module fails during a phase.

    Attributes:
        module_name: Name of the failing module
        phase: Phase being run
    """

    def __init__(self, module_name: str, phase: Phase, cause: Exception):
        super().__init__(
            f'Module "{module_name}" failed during {phase.value} phase: {cause}'
        )
        self.module_name = module_name
        self.phase = phase


class ModuleManager:
    """
    Loads modules and runs their phases.

    The module table is filled by load_all() and only read afterwards.
    """

    def __init__(self, host: "Host", registry: ModuleRegistry | None = None):
        """
        Initialize ModuleManager.

        Registers the administrative options on the host's argument parser.

        Args:
            host: Host context handed to every module's init()
            registry: Factory table (default: the process-wide registry)
        """
        self.host = host
        self.registry = registry
        self.enablement = EnablementRegistry(host.config.disabled_modules)
        self._modules: dict[str, Module] = {}

        self.add_arguments(host.parser)

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        group = parser.add_mutually_exclusive_group()
        group.add_argument(
            "-l",
            "--list-disabled-modules",
            action="store_true",
            help="List disabled modules",
        )
        group.add_argument(
            "-e", "--enable-module", metavar="MODULE_NAME", help="Enable module"
        )
        group.add_argument(
            "-d", "--disable-module", metavar="MODULE_NAME", help="Disable module"
        )

    @property
    def modules(self) -> Mapping[str, Module]:
        """Read-only view of loaded modules, in load order."""
        return MappingProxyType(self._modules)

    @property
    def names(self) -> list[str]:
        return list(self._modules)

    def get_module(self, name: str) -> Module | None:
        return self._modules.get(name)

    def load_all(self) -> bool:
        """
        Run an administrative operation, or discover and load all modules.

        Returns:
            False if an administrative operation ran (nothing was loaded),
            True if discovery ran

        Raises:
            DescriptorError: If a configured descriptor is malformed
            SourceError: If an archive is missing or unreadable
        """
        args = self.host.args

        if getattr(args, "list_disabled_modules", False):
            print("Disabled modules: " + ", ".join(self.enablement.names))
            return False
        name = getattr(args, "disable_module", None)
        if name is not None:
            self.enablement.disable(name)
            print(f'Module "{name}" has been disabled.')
            return False
        name = getattr(args, "enable_module", None)
        if name is not None:
            self.enablement.enable(name)
            print(f'Module "{name}" has been enabled.')
            return False

        for value in self.host.config.module_packages:
            descriptor = parse_descriptor(value)
            with resolve(descriptor, self.host.modules_dir) as archive:
                for candidate in discover(
                    archive, descriptor.package_path, self.registry
                ):
                    self._register(candidate)

        if not self._modules:
            logger.warning("No module has been loaded.")
        return True

    def _register(self, candidate: Candidate) -> None:
        module = candidate.instance
        source = candidate.source

        try:
            name = module.name
        except Exception:
            logger.exception(f"Failed to get the name of {candidate.qualified_name}")
            return

        if not isinstance(name, str) or not name:
            logger.warning(
                f"Skipped {candidate.qualified_name} from {source}: "
                f"invalid module name {name!r}."
            )
            return
        if self.enablement.is_disabled(name):
            logger.debug(f'Skipped module "{name}" from "{source}" because it\'s disabled.')
            return
        if name in self._modules:
            logger.warning(
                f'Skipped module "{name}" from "{source}" ({candidate.qualified_name}): '
                f"a module with this name is already loaded."
            )
            return

        logger.debug(
            f'Loading module: "{name}" from "{source}". Class: {candidate.qualified_name}'
        )
        try:
            module.init(self.host)
            module.prepare()
        except Exception:
            logger.exception(f'Failed to load module "{name}" from "{source}"')
            return

        self._modules[name] = module

    def run_phase(self, phase: Phase | str) -> None:
        """
        Call a phase method on every loaded module, in load order.

        The first failure stops the phase; modules after the failing one
        are not called.

        Args:
            phase: Phase or phase name ("cli", "load", "boot")

        Raises:
            PhaseError: If a module raises
        """
        phase = Phase(phase)
        for name, module in self._modules.items():
            try:
                getattr(module, phase.value)()
            except Exception as e:
                raise PhaseError(name, phase, e) from e

    def run_phases(self) -> None:
        """Run cli, load and boot, each across all modules before the next."""
        for phase in Phase:
            self.run_phase(phase)
