"""
TOML File I/O Handler.

This module provides TOML parsing and writing for the host configuration.

Key features:
- Parse TOML files using tomllib (Python 3.11+)
- Update existing documents in place with tomlkit (keeps comments)
- Generate a commented TOML document from the host schema
"""

import tomllib
from pathlib import Path
from typing import Any

import tomlkit


class TOMLError(Exception):
    """Base exception for TOML-related errors."""

    pass


def read_toml(file_path: Path) -> dict[str, Any]:
    """
    Read and parse a TOML file.

    Args:
        file_path: Path to the TOML file

    Returns:
        Parsed TOML data as dictionary

    Raises:
        TOMLError: If file cannot be read or parsed
    """
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise TOMLError(f"TOML file not found: {file_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise TOMLError(f"Failed to parse TOML file {file_path}: {e}") from e
    except Exception as e:
        raise TOMLError(f"Failed to read TOML file {file_path}: {e}") from e


def write_toml(file_path: Path, data: dict[str, Any]) -> None:
    """
    Write data to a TOML file.

    If the file already exists, its document is loaded with tomlkit and only
    the values are replaced, so user comments survive a save.

    Args:
        file_path: Path to the TOML file
        data: Data to write

    Raises:
        TOMLError: If file cannot be written
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        if file_path.exists():
            with open(file_path, encoding="utf-8") as f:
                doc = tomlkit.load(f)
            for key in list(doc.keys()):
                if key not in data:
                    del doc[key]
            for key, value in data.items():
                doc[key] = value
        else:
            doc = data

        with open(file_path, "w", encoding="utf-8") as f:
            tomlkit.dump(doc, f)
    except Exception as e:
        raise TOMLError(f"Failed to write TOML file {file_path}: {e}") from e


def generate_toml_from_schema(
    title: str, schema: dict[str, Any], config_data: dict[str, Any]
) -> str:
    """
    Generate TOML content from schema with descriptive comments.

    Args:
        title: Heading written as the first comment line
        schema: Schema dictionary (field_name -> ConfigField)
        config_data: Configuration data (field_name -> value)

    Returns:
        TOML string with comments
    """
    doc = tomlkit.document()
    doc.add(tomlkit.comment(title))
    doc.add(tomlkit.nl())

    # Tables must come after plain keys in a TOML document
    tables = []
    for field_name, field in schema.items():
        value = config_data.get(field_name, field.default)
        if isinstance(value, dict):
            tables.append((field_name, field, value))
            continue

        if field.description:
            doc.add(tomlkit.comment(field.description))
        if field.choices is not None:
            doc.add(tomlkit.comment(f"Choices: {', '.join(map(str, field.choices))}"))
        doc.add(field_name, value)
        doc.add(tomlkit.nl())

    for field_name, field, value in tables:
        if field.description:
            doc.add(tomlkit.comment(field.description))
        table = tomlkit.table()
        for key, item in value.items():
            table.add(key, item)
        doc.add(field_name, table)

    return tomlkit.dumps(doc)
