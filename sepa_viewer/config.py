#!/usr/bin/env python3

from __future__ import annotations

import logging
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

# yaml key (nested keys joined with ":") -> ViewerConfig attribute
YAML_KEYS = {
    "title": "title",
    "columns:category": "category_width",
    "columns:field": "field_width",
    "columns:value": "value_width",
    "table_height": "table_height",
    "notify_seconds": "notify_seconds",
    "truncate_width": "truncate_width",
    "clipboard_command": "clipboard_command",
}


@dataclass
class ViewerConfig:
    title: str = "SEPA Payment Information"
    category_width: int = 20
    field_width: int = 25
    value_width: int = 50
    table_height: int = 20
    notify_seconds: float = 2.0
    truncate_width: int = 40
    clipboard_command: list[str] | None = None

    def __post_init__(self) -> None:
        for name in ("category_width", "field_width", "value_width", "table_height"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name}={value!r} was not of type `int`")
            if value <= 0:
                raise ValueError(f"{name}={value!r} must be positive")

        if not isinstance(self.title, str):
            raise TypeError(f"title={self.title!r} was not of type `str`")
        if not isinstance(self.notify_seconds, (int, float)) or isinstance(
            self.notify_seconds, bool
        ):
            raise TypeError(
                f"notify_seconds={self.notify_seconds!r} was not a number"
            )
        if self.notify_seconds <= 0:
            raise ValueError(f"notify_seconds={self.notify_seconds!r} must be positive")
        if not isinstance(self.truncate_width, int) or isinstance(
            self.truncate_width, bool
        ):
            raise TypeError(
                f"truncate_width={self.truncate_width!r} was not of type `int`"
            )
        if self.truncate_width <= 3:
            raise ValueError(
                f"truncate_width={self.truncate_width!r} must leave room for '...'"
            )
        if self.clipboard_command is not None:
            if not isinstance(self.clipboard_command, list) or not all(
                isinstance(part, str) for part in self.clipboard_command
            ):
                raise TypeError(
                    f"clipboard_command={self.clipboard_command!r} "
                    "was not a list of `str`"
                )
            if not self.clipboard_command:
                raise ValueError("clipboard_command must not be empty")

    @classmethod
    def from_yaml(cls, fname) -> ViewerConfig:
        with open(fname) as f:
            content = yaml.safe_load(f)

        if content is None:
            logger.info(f"{fname} is empty, using defaults")
            return cls()
        if not isinstance(content, dict):
            raise TypeError(f"{content=} was not of type `dict`")

        settings = {}
        for key, value in flatten_dict(content).items():
            if key not in YAML_KEYS:
                raise ValueError(
                    f"Unknown setting {key!r} in {fname}, "
                    f"expected one of: {list(YAML_KEYS)}"
                )
            settings[YAML_KEYS[key]] = value

        logger.debug(f"Loaded {settings=} from {fname}")
        return cls(**settings)


def flatten_dict(dd, separator=":", prefix=""):
    return (
        {
            str(prefix) + separator + str(k) if prefix else str(k): v
            for kk, vv in dd.items()
            for k, v in flatten_dict(vv, separator, kk).items()
        }
        if isinstance(dd, dict)
        else {prefix: dd}
    )
