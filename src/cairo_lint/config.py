"""Project configuration for the Cairo linter.

The configuration enables or disables rules by their suppression name::

    # cairo-lint.yaml
    panic: true           # off by default, turned on
    bool_comparison: false

The mapping may also sit under a top-level ``cairo-lint`` key, which
lets the settings share a file with other tools.

Functions:
- load_config: Load and validate a configuration file
- find_config: Locate the configuration file of a project
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from cairo_lint.linter.context import LintContext

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("cairo-lint.yaml", ".cairo-lint.yaml")
CONFIG_SECTION = "cairo-lint"


class ConfigError(ValueError):
    """Raised when a configuration file is malformed or names an unknown rule."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        location = f"{path}: " if path is not None else ""
        super().__init__(f"{location}{message}")


@dataclass(frozen=True)
class LintConfig:
    """Per-project rule switches.

    Parameters
    ----------
    rules:
        Mapping of allowed name to enabled flag.  Names absent from the
        mapping use the default of their rule.
    """

    rules: Mapping[str, bool] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        context: LintContext | None = None,
    ) -> LintConfig:
        """Validate ``mapping`` against the rule registry.

        Parameters
        ----------
        mapping:
            Raw ``name -> bool`` mapping, typically parsed from YAML.
        context:
            Registry whose allowed names are accepted.  Defaults to the
            shared registry.

        Raises
        ------
        ConfigError
            If a name is not a registered allowed name or a value is not
            a boolean.
        """
        from cairo_lint.linter.context import get_lint_context

        ctx = context if context is not None else get_lint_context()
        known = set(ctx.allowed_names())
        rules: dict[str, bool] = {}
        for name, value in mapping.items():
            if name not in known:
                raise ConfigError(f"The lint '{name}' specified in the configuration is not supported")
            if not isinstance(value, bool):
                raise ConfigError(
                    f"The value of lint '{name}' must be true or false, got {value!r}"
                )
            rules[name] = value
        return cls(rules=rules)

    def is_enabled(self, allowed_name: str, default: bool = True) -> bool:
        """Return the switch of ``allowed_name``, ``default`` when unset."""
        return self.rules.get(allowed_name, default)


def load_config(path: Path, context: LintContext | None = None) -> LintConfig:
    """Load configuration from a YAML file.

    Parameters
    ----------
    path:
        File to read.  A missing or empty file yields the empty
        configuration.
    context:
        Registry used for validation.

    Raises
    ------
    ConfigError
        If the YAML is invalid or fails validation.
    """
    if not path.exists():
        logger.debug("No configuration at %s, using defaults", path)
        return LintConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}", path) from exc

    if data is None:
        return LintConfig()
    if not isinstance(data, dict):
        raise ConfigError("The configuration must be a mapping of lint names to booleans", path)
    if CONFIG_SECTION in data:
        data = data[CONFIG_SECTION] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"The '{CONFIG_SECTION}' section must be a mapping", path)

    try:
        config = LintConfig.from_mapping(data, context)
    except ConfigError as exc:
        raise ConfigError(str(exc), path) from exc
    logger.debug("Loaded configuration from %s (%d rule switch(es))", path, len(config.rules))
    return config


def find_config(start: Path) -> Path | None:
    """Return the nearest configuration file in ``start`` or its parents."""
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate_dir in (directory, *directory.parents):
        for name in CONFIG_FILE_NAMES:
            candidate = candidate_dir / name
            if candidate.is_file():
                return candidate
    return None
