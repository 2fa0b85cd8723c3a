"""Picker configuration loaded from YAML."""

import importlib
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_ENV_VAR = "GH_PICKER_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/gh-picker/config.yaml")


def resolve_callable(reference: str) -> Callable[..., Any]:
    """Import a callable from a 'module:attribute' reference.

    Args:
        reference: Reference such as 'my_package.actions:show_raw'

    Returns:
        The referenced callable

    Raises:
        ValueError: If the reference is malformed or does not name a callable
    """
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise ValueError(
            f"Invalid action reference '{reference}'. Expected format: module:function"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}") from e

    target: Any = module
    for part in attribute.split("."):
        target = getattr(target, part, None)
        if target is None:
            raise ValueError(f"'{reference}' not found")
    if not callable(target):
        raise ValueError(f"'{reference}' is not callable")
    return target


class OrderBy(BaseModel):
    """Ordering of a GraphQL connection."""

    model_config = ConfigDict(frozen=True)

    field: str = Field("CREATED_AT", description="IssueOrderField value")
    direction: str = Field("DESC", description="ASC or DESC")


class ListConfig(BaseModel):
    """Per list kind preferences."""

    model_config = ConfigDict(frozen=True)

    order_by: OrderBy = Field(default_factory=OrderBy)


class CustomAction(BaseModel):
    """User-defined picker action bound to a key chord.

    Definitions missing either the key chord or the action are ignored.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    lhs: str | None = Field(None, description="Key chord triggering the action")
    action: Callable[..., Any] | None = Field(
        None, description="Callback called with (picker, item)"
    )
    desc: str | None = Field(None, description="Short description")

    @field_validator("action", mode="before")
    @classmethod
    def _resolve_action(cls, value: Any) -> Any:
        if isinstance(value, str):
            return resolve_callable(value)
        return value


class KeyMapping(BaseModel):
    """A remappable key chord for a named built-in action."""

    model_config = ConfigDict(frozen=True)

    lhs: str | None = None
    desc: str | None = None


class NotificationMappings(BaseModel):
    """Key mappings of the notifications picker."""

    model_config = ConfigDict(frozen=True)

    read: KeyMapping = Field(
        default_factory=lambda: KeyMapping(
            lhs="<C-r>", desc="mark notification as read"
        )
    )


class Mappings(BaseModel):
    """Global key remaps."""

    model_config = ConfigDict(frozen=True)

    notification: NotificationMappings = Field(default_factory=NotificationMappings)


class PickerConfig(BaseModel):
    """Process-wide picker configuration, read-only once loaded."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    github_host: str = Field("github.com", description="GitHub host name")
    issues: ListConfig = Field(default_factory=ListConfig)
    pull_requests: ListConfig = Field(default_factory=ListConfig)
    mappings: Mappings = Field(default_factory=Mappings)
    custom_actions: dict[str, CustomAction] = Field(default_factory=dict)


def config_path(path: str | Path | None = None) -> Path:
    """Resolve the configuration file location."""
    if path:
        return Path(path).expanduser()
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_config(path: str | Path | None = None) -> PickerConfig:
    """Load picker configuration.

    Args:
        path: Configuration file. Defaults to $GH_PICKER_CONFIG, then
            ~/.config/gh-picker/config.yaml

    Returns:
        PickerConfig, with defaults when the file does not exist

    Raises:
        ValueError: If the file is not valid YAML or fails validation
    """
    file_path = config_path(path)
    if not file_path.exists():
        return PickerConfig()

    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {file_path} must be a mapping")

    try:
        return PickerConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {file_path}: {e}") from e
