import posixpath
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from graphql import Source

from gqlmodules import log
from gqlmodules.utils.type_usage import collect_used_types_from_sources

SEPARATOR = "/"


class ModuleResolutionError(ValueError):
    """Raised when a source cannot be assigned to a module below the base directory."""


@dataclass(frozen=True)
class ModuleReport:
    name: str
    files: tuple[str, ...]
    used_types: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"files": list(self.files), "usedTypes": list(self.used_types)}


def _normalize(path: str) -> str:
    return posixpath.normpath(path.replace("\\", SEPARATOR))


def ensure_dir_separator_at_end(path: str) -> str:
    return path if path.endswith(SEPARATOR) else path + SEPARATOR


def strip_filename(path: str) -> str:
    """Return the directory part of a ``/``-separated path, or an empty string if it has none."""
    return path[: path.rfind(SEPARATOR)] if SEPARATOR in path else ""


def extract_module_directory(filepath: str, base_path: str) -> str:
    """
    Infer the module a file belongs to: the first path segment below the base directory.

    Args:
        filepath: Path of the schema file, e.g. ``schema/users/types.graphql``.
        base_path: Directory holding one sub-directory per module, e.g. ``schema``.
    Returns:
        str: The module directory name, e.g. ``users``.
    Raises:
        ModuleResolutionError: If the file does not lie below ``base_path``.
    """
    base = ensure_dir_separator_at_end(_normalize(base_path))
    normalized = _normalize(filepath)
    relative_path = normalized.removeprefix(base)
    if relative_path == normalized or not relative_path:
        raise ModuleResolutionError(f"Source '{filepath}' is not located under base directory '{base_path}'")

    module_directory, _, _ = relative_path.partition(SEPARATOR)
    return module_directory


def group_sources_by_module(sources: list[Source], base_path: str) -> dict[str, list[Source]]:
    """Group sources by the module directory inferred from their names, keeping input order."""
    grouped: dict[str, list[Source]] = defaultdict(list)

    for source in sources:
        grouped[extract_module_directory(source.name, base_path)].append(source)

    return dict(grouped)


def build_module_reports(sources: list[Source], base_path: str) -> dict[str, ModuleReport]:
    """Group sources by module and collect the types used by each module's documents."""
    reports: dict[str, ModuleReport] = {}

    for module_name, module_sources in group_sources_by_module(sources, base_path).items():
        used_types = collect_used_types_from_sources(module_sources)
        log.debug(f"Module '{module_name}': {len(module_sources)} file(s), {len(used_types)} used type(s)")
        reports[module_name] = ModuleReport(
            name=module_name,
            files=tuple(source.name for source in module_sources),
            used_types=tuple(used_types),
        )

    return reports
