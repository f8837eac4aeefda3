"""
Schema loading from files.

Source files (``.ts`` and anything unrecognised) go through the declaration
parser. ``.json``/``.yaml``/``.yml`` documents mirror the declaration model
directly and are validated with pydantic:

    declarations:
      - kind: enum
        name: Color
        members: [{name: RED, value: red}]
      - kind: record
        name: Car
        properties:
          - {name: paint, type: "Color | string"}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ParseError
from .ir import EnumSpec, SchemaSpec
from .parser import parse_schema

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = {".json", ".yaml", ".yml"}


def load_schema_document(data: Any, source: str = "<document>") -> SchemaSpec:
    """
    Validate a parsed JSON/YAML document into a SchemaSpec.

    A bare list is accepted as the declaration list.

    Raises:
        ParseError: If the document does not match the declaration model
    """
    if isinstance(data, list):
        data = {"declarations": data}
    try:
        return SchemaSpec.model_validate(data)
    except ValidationError as exc:
        raise ParseError(f"Invalid declaration document {source}:\n{exc}") from exc


def load_schema_file(path: Path) -> SchemaSpec:
    """
    Load declarations from a schema file.

    Args:
        path: Source (.ts) or declaration document (.json/.yaml/.yml)

    Returns:
        SchemaSpec with declarations in file order

    Raises:
        ParseError: If the file cannot be read or parsed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"Cannot read schema file {path}: {exc}") from exc

    suffix = path.suffix.lower()
    if suffix not in DOCUMENT_SUFFIXES:
        schema = parse_schema(text, path)
    else:
        try:
            data = json.loads(text) if suffix == ".json" else yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ParseError(f"Invalid declaration document {path}: {exc}") from exc
        schema = load_schema_document(data, str(path))

    logger.debug("Loaded %d declarations from %s", len(schema.declarations), path)
    return schema


def require_enums_only(schema: SchemaSpec, source: str) -> SchemaSpec:
    """
    Check that an extra enumeration source declares nothing but enums.

    Raises:
        ParseError: If any other declaration is present
    """
    others = [d for d in schema.declarations if not isinstance(d, EnumSpec)]
    if others:
        names = ", ".join(d.name or "<anonymous>" for d in others)
        raise ParseError(f"{source}: enumeration sources may only declare enums (found {names})")
    return schema


def load_enum_file(path: Path) -> SchemaSpec:
    """Load an extra enumeration source (see ``require_enums_only``)."""
    return require_enums_only(load_schema_file(path), str(path))
