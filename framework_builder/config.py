"""Builder settings and the YAML loader for them."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

import jsonschema
import yaml

from framework_builder.core.document import DEFAULT_ACCOUNT, DEFAULT_NAME_PREFIX
from framework_builder.core.template import LABEL_DEFAULTS
from framework_builder.errors import ConfigError

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name_prefix": {"type": "string", "minLength": 1},
        "default_account": {"type": "string", "minLength": 1},
        "label_defaults": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class BuilderConfig:
    """Settings applied by FrameworkBuilder.

    Attributes
    ----------
    name_prefix : str
        Leading part of generated framework names.
    default_account : str
        Account placeholder used for the initial framework's name.
    label_defaults : Dict[str, str]
        Row captions used when a document has no custom label. Merged over
        the template defaults.
    log_level : str
        Level for the ``framework_builder`` logger.
    """

    name_prefix: str = DEFAULT_NAME_PREFIX
    default_account: str = DEFAULT_ACCOUNT
    label_defaults: Dict[str, str] = field(default_factory=lambda: dict(LABEL_DEFAULTS))
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuilderConfig":
        try:
            jsonschema.validate(data, CONFIG_SCHEMA)
        except jsonschema.ValidationError as exc:
            raise ConfigError(f"Invalid builder config: {exc.message}") from exc
        labels = dict(LABEL_DEFAULTS)
        labels.update(data.get("label_defaults", {}))
        return cls(
            name_prefix=data.get("name_prefix", DEFAULT_NAME_PREFIX),
            default_account=data.get("default_account", DEFAULT_ACCOUNT),
            label_defaults=labels,
            log_level=data.get("log_level", "INFO"),
        )


def load_config(path: Union[str, Path]) -> BuilderConfig:
    """Read a YAML settings file.

    An empty file yields the defaults.

    Raises
    ------
    ConfigError
        If the file is missing, is not valid YAML, or fails the schema.
    """
    config_path = Path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {config_path}") from exc

    if data is None:
        return BuilderConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")
    return BuilderConfig.from_dict(data)
