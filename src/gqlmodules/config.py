from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field

from gqlmodules import log


class ModulesConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    base_dir: Path | None = Field(None, alias="baseDir")
    schemas: list[Path] = Field(default_factory=list)
    quoted: bool = False

    def resolve_relative_to(self, directory: Path) -> "ModulesConfig":
        """Return a copy with relative paths anchored at ``directory``."""
        base_dir = self.base_dir
        if base_dir is not None and not base_dir.is_absolute():
            base_dir = directory / base_dir
        schemas = [path if path.is_absolute() else directory / path for path in self.schemas]
        return self.model_copy(update={"base_dir": base_dir, "schemas": schemas})


def load_modules_config(config_path: Path | None) -> ModulesConfig | None:
    """
    Load and validate a modules configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None to skip loading.

    Returns:
        A validated ModulesConfig, or None if config_path is None.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If the YAML root is not a mapping.
        ValidationError: If validation against ModulesConfig fails.
    """
    if config_path is None:
        log.debug("No modules config provided")
        return None

    raw: Any
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    log.debug(f"Loaded modules config from {config_path}")

    # Treat empty file or explicit YAML null as "defaults"
    if raw is None or raw == {}:
        return ModulesConfig()

    if not isinstance(raw, dict):
        raise TypeError(f"Modules config root must be a mapping (YAML object), got {type(raw).__name__}")

    raw_dict = cast(dict[str, Any], raw)
    return ModulesConfig.model_validate(raw_dict).resolve_relative_to(config_path.parent)
