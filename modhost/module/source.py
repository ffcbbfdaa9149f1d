"""
Package Source Resolver.

This module turns a package descriptor into an open archive whose members
can be listed and imported.

Key features:
- "self" origin: the directory tree (or zipapp) the host was imported from
- Named origins: <modules_dir>/<origin>.zip, .pyz or .whl
- Archives are appended to sys.path so their code stays importable after
  discovery, for modules that import lazily
- Archives are context managers, closed once enumeration is done
"""

import importlib
import logging
import sys
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

from modhost.module.descriptor import PackageDescriptor

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".zip", ".pyz", ".whl")
MEMBER_SUFFIXES = (".py", ".pyc")


class SourceError(Exception):
    """Base exception for archive resolution errors."""

    pass


class NotFoundError(SourceError):
    """Raised when the archive backing a descriptor does not exist."""

    pass


def package_prefix(package_path: str) -> str:
    """Convert "a.b.c" to the archive-internal prefix "a/b/c/"."""
    return package_path.replace(".", "/") + "/"


def member_to_module(member: str) -> str:
    """Convert "a/b/c.py" to the module name "a.b.c"."""
    for suffix in MEMBER_SUFFIXES:
        if member.endswith(suffix):
            member = member[: -len(suffix)]
            break
    return member.replace("/", ".")


class Archive(ABC):
    """
    An open, enumerable, importable bundle of Python modules.

    Attributes:
        location: Path of the directory or archive file
    """

    def __init__(self, location: Path):
        self.location = location

    @property
    def name(self) -> str:
        return self.location.name

    @abstractmethod
    def members(self, prefix: str = "") -> Iterator[str]:
        """
        Enumerate member paths ("/"-separated, relative to the archive root).

        Args:
            prefix: Only members under this prefix are needed; archives may
                use it to avoid walking unrelated content

        Returns:
            Iterator over member paths, in a stable order
        """

    def load(self, module_name: str) -> ModuleType:
        """Import a member module by its dotted name."""
        return importlib.import_module(module_name)

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.location)!r})"


class DirectoryArchive(Archive):
    """A directory tree already on sys.path."""

    def members(self, prefix: str = "") -> Iterator[str]:
        base = self.location / prefix if prefix else self.location
        if not base.is_dir():
            return

        for path in sorted(base.rglob("*")):
            if path.is_file():
                yield path.relative_to(self.location).as_posix()


class ZipArchive(Archive):
    """A zip file (.zip, .pyz or .whl) importable through zipimport."""

    def __init__(self, location: Path):
        super().__init__(location)
        try:
            self._zip = zipfile.ZipFile(location)
        except (zipfile.BadZipFile, OSError) as e:
            raise SourceError(f"Failed to open archive {location}: {e}") from e

    def members(self, prefix: str = "") -> Iterator[str]:
        for info in self._zip.infolist():
            if not info.is_dir() and info.filename.startswith(prefix):
                yield info.filename

    def close(self) -> None:
        self._zip.close()


def make_importable(location: Path) -> None:
    """Append an archive to sys.path (once) so its modules can be imported."""
    entry = str(location.resolve())
    if entry not in sys.path:
        sys.path.append(entry)
        importlib.invalidate_caches()
        logger.debug(f"Added {entry} to the import path")


def locate_self() -> Archive:
    """
    Open the archive the host itself was imported from.

    Raises:
        NotFoundError: If the host location cannot be determined
    """
    # modhost/module/source.py -> directory holding the modhost package
    root = Path(__file__).resolve().parents[2]
    if root.is_dir():
        return DirectoryArchive(root)

    # Running from a zipapp: walk up to the zip file itself
    for parent in (root, *root.parents):
        if parent.is_file() and zipfile.is_zipfile(parent):
            return ZipArchive(parent)
        if parent.is_dir():
            break

    raise NotFoundError(f"Cannot locate the host archive from {__file__}")


def resolve(descriptor: PackageDescriptor, modules_dir: Path) -> Archive:
    """
    Resolve a descriptor to an open archive.

    Args:
        descriptor: Package descriptor
        modules_dir: Directory holding external module archives

    Returns:
        Open Archive; the caller closes it

    Raises:
        NotFoundError: If no archive exists for the descriptor's origin
        SourceError: If the archive cannot be opened
    """
    if descriptor.is_self:
        return locate_self()

    for suffix in ARCHIVE_SUFFIXES:
        path = modules_dir / f"{descriptor.origin}{suffix}"
        if path.is_file():
            archive = ZipArchive(path)
            make_importable(path)
            return archive

    candidates = ", ".join(f"{descriptor.origin}{s}" for s in ARCHIVE_SUFFIXES)
    raise NotFoundError(f"No archive for {descriptor} in {modules_dir} (tried {candidates})")
