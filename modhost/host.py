"""
Host - the context every module receives in init().

The host owns the configuration, the argument parser, the logger, shared
state and the module manager, and runs the whole boot sequence:

1. parse the command line (module options are not registered yet, so
   unknown options are tolerated)
2. load modules (or run an administrative operation and stop)
3. save the configuration
4. parse the command line again with the options modules added in prepare()
5. run the cli, load and boot phases
"""

import argparse
import logging
from pathlib import Path
from typing import Any

from modhost.config import DEFAULT_CONFIG_FILE, LOG_LEVELS, load_config, save_config
from modhost.log import get_module_logger, setup_logging
from modhost.module.descriptor import DescriptorError
from modhost.module.manager import ModuleManager, PhaseError
from modhost.module.registry import ModuleRegistry
from modhost.module.source import SourceError

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the host argument parser (modules add their own options later)."""
    parser = argparse.ArgumentParser(
        prog="modhost",
        description="modhost - module host",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=str(DEFAULT_CONFIG_FILE),
        help=f"Config file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Override log level")
    return parser


class Host:
    """
    Host context.

    Attributes:
        config_path: Path of the TOML config file
        config: Loaded HostConfig
        parser: Argument parser, shared with modules
        args: Parsed arguments (empty until start())
        state: Free-form state shared between modules
        manager: The ModuleManager
    """

    def __init__(
        self,
        config_path: Path | str = DEFAULT_CONFIG_FILE,
        registry: ModuleRegistry | None = None,
    ):
        self.config_path = Path(config_path)
        self.config = load_config(self.config_path)
        self.parser = create_parser()
        self.args = argparse.Namespace()
        self.state: dict[str, Any] = {}
        self.logger = logging.getLogger("modhost")
        self.manager = ModuleManager(self, registry=registry)

    @property
    def modules_dir(self) -> Path:
        return Path(self.config.modules_dir)

    def get_logger(self, module_name: str) -> logging.Logger:
        """Get a logger for a module."""
        return get_module_logger(module_name)

    def module_props(self, module_name: str) -> dict[str, Any]:
        """Get the persisted property table of a module."""
        return self.config.props(module_name)

    def save_config(self) -> None:
        save_config(self.config, self.config_path)

    def start(self, argv: list[str] | None = None) -> int:
        """
        Boot the host.

        Args:
            argv: Command line arguments (default: sys.argv[1:])

        Returns:
            Exit code (0 for success, 1 if loading or a phase failed)

        Raises:
            ConfigError: If the config file cannot be saved
        """
        self.args, _ = self.parser.parse_known_args(argv)

        if self.args.verbose:
            setup_logging("DEBUG")
        else:
            setup_logging(self.args.log_level or self.config.log_level)

        try:
            loaded = self.manager.load_all()
        except (DescriptorError, SourceError) as e:
            logger.error(f"Failed to load modules: {e}")
            return 1
        finally:
            self.save_config()

        if not loaded:
            return 0

        self.args = self.parser.parse_args(argv)

        try:
            self.manager.run_phases()
        except PhaseError as e:
            logger.error(str(e), exc_info=e.__cause__)
            return 1
        finally:
            self.save_config()

        return 0
