"""
modhost CLI.

Usage:
    modhost                          Load modules and run them
    modhost -l                       List disabled modules
    modhost -d <module>              Disable a module
    modhost -e <module>              Enable a module
    modhost -c <file> -v             Use another config file, debug output
"""

import argparse
import sys

from modhost.config import DEFAULT_CONFIG_FILE, ConfigError
from modhost.host import Host


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the modhost CLI."""
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("-c", "--config", default=str(DEFAULT_CONFIG_FILE))
    known, _ = pre.parse_known_args(argv)

    try:
        host = Host(known.config)
        return host.start(argv)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
