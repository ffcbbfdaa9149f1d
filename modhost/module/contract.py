"""
Module Contract.

Every unit the host can discover implements the Module ABC. All members are
abstract: a module spells out each lifecycle hook, even when it has nothing
to do in it.

Lifecycle, as driven by the ModuleManager:
1. construction (no arguments)
2. init(host) - right after construction, no long-running work
3. prepare()  - early validation; raising here drops the module
4. cli(), load(), boot() - each called on every loaded module before the
   next phase starts on any of them
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modhost.host import Host


class Phase(Enum):
    """Post-discovery phases, in the order they are run."""

    CLI = "cli"
    LOAD = "load"
    BOOT = "boot"


class Module(ABC):
    """Base class for host modules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable, non-empty identifier, used for enable/disable addressing."""

    @abstractmethod
    def init(self, host: "Host") -> None:
        """Receive the host context (logging, configuration, shared state)."""

    @abstractmethod
    def prepare(self) -> None:
        """Validate early; an exception excludes the module."""

    @abstractmethod
    def cli(self) -> None:
        """React to parsed command line options."""

    @abstractmethod
    def load(self) -> None:
        """Load phase."""

    @abstractmethod
    def boot(self) -> None:
        """Boot phase."""

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} name={self.name!r}>"
