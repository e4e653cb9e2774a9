"""Generator configuration.

Defaults target the Keycloak admin REST reference; a YAML file can
override any of them.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from restdoc_codegen.errors import ConfigError

DEFAULT_ENUM_RENAMES = {"Userinfo": "UserInfo"}
DEFAULT_RESERVED_NAMES = ("type", "self")


class GeneratorConfig(BaseModel):
    """Immutable settings passed through the extraction and rendering steps."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    enum_renames: dict[str, str] = DEFAULT_ENUM_RENAMES
    reserved_names: tuple[str, ...] = DEFAULT_RESERVED_NAMES
    client_name: str = "KeycloakAdmin"
    error_type: str = "KeycloakError"


def load_config(file_path: Path | None) -> GeneratorConfig:
    """Load a YAML config file, or return the defaults when no path is given."""
    if file_path is None:
        return GeneratorConfig()

    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"{file_path}: {e}") from e

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{file_path}: expected a mapping, got {type(data).__name__}")

    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"{file_path}: {e}") from e
