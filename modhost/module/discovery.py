"""
Discovery Engine.

Walks the members of an archive below a package path, imports them, and
instantiates the module factories they register.

A bad candidate never stops the scan: import errors, constructor errors and
factories that are not modules are logged and skipped one at a time.
"""

import inspect
import logging
from collections.abc import Iterator
from dataclasses import dataclass

from modhost.module.contract import Module
from modhost.module.registry import Factory, ModuleRegistry, get_registry
from modhost.module.source import (
    MEMBER_SUFFIXES,
    Archive,
    member_to_module,
    package_prefix,
)

logger = logging.getLogger(__name__)


@dataclass
class Candidate:
    """
    A freshly constructed module, not yet initialised.

    Attributes:
        instance: The module instance
        qualified_name: Qualified name of the factory that built it
        source: Name of the archive it came from
    """

    instance: Module
    qualified_name: str
    source: str


def candidate_modules(archive: Archive, package_path: str) -> Iterator[str]:
    """
    List the dotted names of candidate modules under a package path.

    Members must sit below the package prefix, carry a Python suffix, and
    have no path segment starting with "_" (package __init__ files,
    __pycache__ directories and private modules are skipped).
    """
    prefix = package_prefix(package_path)
    seen = set()

    for member in archive.members(prefix):
        if not member.startswith(prefix) or not member.endswith(MEMBER_SUFFIXES):
            continue
        if any(segment.startswith("_") for segment in member.split("/")):
            continue

        module_name = member_to_module(member)
        if module_name in seen:
            continue
        seen.add(module_name)
        yield module_name


def _is_eligible(factory: Factory, source: str) -> bool:
    target = factory.target

    if factory.is_nested:
        logger.debug(
            f"Skipped {factory.qualified_name} from {source} because it's nested."
        )
        return False

    if inspect.isclass(target):
        if not issubclass(target, Module):
            logger.debug(
                f"Skipped {factory.qualified_name} from {source} because it's not a module."
            )
            return False
        if inspect.isabstract(target):
            logger.debug(
                f"Skipped {factory.qualified_name} from {source} because it's abstract."
            )
            return False

    return True


def discover(
    archive: Archive,
    package_path: str,
    registry: ModuleRegistry | None = None,
) -> Iterator[Candidate]:
    """
    Discover and instantiate modules under a package path.

    The generator re-enumerates the archive on every call. It stops at the
    end of the archive; per-candidate failures are logged and skipped.

    Args:
        archive: Open archive to scan
        package_path: Dotted package path restricting candidates
        registry: Factory table (default: the process-wide registry)

    Yields:
        Candidate for each module instance built
    """
    registry = registry if registry is not None else get_registry()

    for module_name in candidate_modules(archive, package_path):
        try:
            archive.load(module_name)
        except Exception:
            logger.exception(f"Failed to import {module_name} from {archive.name}")
            continue

        factories = registry.factories_in(module_name)
        if not factories:
            logger.debug(f"Skipped {module_name} from {archive.name}: no modules registered.")
            continue

        for factory in factories:
            if not _is_eligible(factory, archive.name):
                continue

            try:
                instance = factory.target()
            except Exception:
                logger.exception(
                    f"Failed to instantiate {factory.qualified_name} from {archive.name}"
                )
                continue

            if not isinstance(instance, Module):
                logger.debug(
                    f"Skipped {factory.qualified_name} from {archive.name} "
                    f"because it did not build a module."
                )
                continue

            yield Candidate(
                instance=instance,
                qualified_name=factory.qualified_name,
                source=archive.name,
            )
