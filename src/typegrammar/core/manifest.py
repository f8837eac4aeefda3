import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError

LIST_ELEMENT_MODES = ("all", "referenced")


@dataclass
class SchemaConfig:
    """Schema sources, relative to the manifest directory."""

    paths: list[str] = field(default_factory=list)
    enums: list[str] = field(default_factory=list)  # enum-only sources, compiled first


@dataclass
class OutputConfig:
    """Where compiled grammar text is written."""

    path: str | None = None  # None writes to stdout


@dataclass
class CompilerConfig:
    """Compiler options."""

    list_elements: str = "all"  # "all" | "referenced"


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from typegrammar.toml.

    Contains the project name, the root record, schema sources, the output
    location and compiler options. Relative paths are resolved against
    ``base_dir``.
    """

    name: str
    root: str
    schema: SchemaConfig
    output: OutputConfig = field(default_factory=OutputConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    base_dir: Path = field(default_factory=Path)

    @property
    def schema_paths(self) -> list[Path]:
        return [self.base_dir / p for p in self.schema.paths]

    @property
    def enum_paths(self) -> list[Path]:
        return [self.base_dir / p for p in self.schema.enums]

    @property
    def output_path(self) -> Path | None:
        if self.output.path is None:
            return None
        return self.base_dir / self.output.path


def _string_list(value: object, key: str, path: Path) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ManifestError(f"{path}: '{key}' must be a string or a list of strings")
    return list(value)


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load a typegrammar.toml manifest.

    Raises:
        ManifestError: If the file is missing, is not valid TOML, or has bad values
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"Invalid TOML in {path}: {exc}") from exc

    project = data.get("project", {})
    schema_data = data.get("schema", {})
    output_data = data.get("output", {})
    compiler_data = data.get("compiler", {})

    root = project.get("root")
    if not isinstance(root, str) or not root:
        raise ManifestError(f"{path}: [project] root must name the root record")

    schema_config = SchemaConfig(
        paths=_string_list(schema_data.get("paths", []), "schema.paths", path),
        enums=_string_list(schema_data.get("enums", []), "schema.enums", path),
    )
    if not schema_config.paths:
        raise ManifestError(f"{path}: [schema] paths must list at least one schema file")

    output_path = output_data.get("path")
    if output_path is not None and not isinstance(output_path, str):
        raise ManifestError(f"{path}: 'output.path' must be a string")

    list_elements = compiler_data.get("list_elements", "all")
    if list_elements not in LIST_ELEMENT_MODES:
        raise ManifestError(
            f"{path}: 'compiler.list_elements' must be one of {list(LIST_ELEMENT_MODES)}, "
            f"got {list_elements!r}"
        )

    return ProjectManifest(
        name=project.get("name", "unnamed"),
        root=root,
        schema=schema_config,
        output=OutputConfig(path=output_path),
        compiler=CompilerConfig(list_elements=list_elements),
        base_dir=path.parent,
    )
