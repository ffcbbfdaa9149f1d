"""
Status module.

Adds --list-modules to the command line and reports what was booted.
"""

from modhost.module import Module, register_module


@register_module
class StatusModule(Module):
    """Reports the loaded modules."""

    def __init__(self):
        self.host = None
        self.logger = None

    @property
    def name(self) -> str:
        return "status"

    def init(self, host) -> None:
        self.host = host
        self.logger = host.get_logger(self.name)

    def prepare(self) -> None:
        self.host.parser.add_argument(
            "--list-modules", action="store_true", help="List loaded modules"
        )

    def cli(self) -> None:
        if self.host.args.list_modules:
            print("Loaded modules: " + ", ".join(self.host.manager.names))

    def load(self) -> None:
        pass

    def boot(self) -> None:
        names = self.host.manager.names
        self.host.state["booted"] = names
        self.logger.info(f"{len(names)} module(s) booted: {', '.join(names)}")
