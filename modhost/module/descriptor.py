"""Package descriptors ("origin:package.path")."""

import re
from dataclasses import dataclass

SELF_ORIGIN = "self"

_PACKAGE_PATH = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class DescriptorError(Exception):
    """Raised when a package descriptor is malformed."""

    pass


@dataclass(frozen=True)
class PackageDescriptor:
    """
    Where to look for modules.

    Attributes:
        origin: "self" for the host's own package, else the stem of an
            archive in the modules directory
        package_path: Dotted package restricting which members are candidates
    """

    origin: str
    package_path: str

    @property
    def is_self(self) -> bool:
        return self.origin == SELF_ORIGIN

    def __str__(self) -> str:
        return f"{self.origin}:{self.package_path}"


def parse_descriptor(value: str) -> PackageDescriptor:
    """
    Parse an "origin:package.path" string.

    Raises:
        DescriptorError: If either part is missing or the path is not a
            dotted identifier path
    """
    origin, sep, package_path = value.strip().partition(":")
    origin = origin.strip()
    package_path = package_path.strip()

    if not sep or not origin or not package_path:
        raise DescriptorError(
            f"Invalid package descriptor {value!r}, expected origin:package.path"
        )
    if "/" in origin or "\\" in origin:
        raise DescriptorError(f"Invalid origin {origin!r} in {value!r}")
    if not _PACKAGE_PATH.match(package_path):
        raise DescriptorError(f"Invalid package path {package_path!r} in {value!r}")

    return PackageDescriptor(origin=origin, package_path=package_path)
