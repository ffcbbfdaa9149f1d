"""
modhost - a module host.

Discovers modules packaged with the host or bundled in archives under
modules/, loads the enabled ones and runs them through the cli, load and
boot phases.
"""

__version__ = "0.1.0"

from modhost.host import Host
from modhost.module import Module, Phase, register_module

__all__ = [
    "__version__",
    "Host",
    "Module",
    "Phase",
    "register_module",
]
