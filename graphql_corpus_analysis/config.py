"""
Configuration for analysis runs.

Configuration can be loaded from a JSON file and overridden from the
command line. Options are validated here, before they reach the analyzers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .errors import ConfigurationError

UNUSED_FIELDS_RULE = "no-unused-fields"
DEPTH_RULE = "selection-set-depth"

# Default used by the recommended configuration
DEFAULT_MAX_DEPTH = 7

LOG_FORMATS = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARN", "WARNING", "ERROR")


@dataclass
class DepthConfig:
    """Options of the selection-set-depth rule."""

    max_depth: int = DEFAULT_MAX_DEPTH
    ignore: list[str] = field(default_factory=list)

    @staticmethod
    def from_dict(d: dict) -> DepthConfig:
        """Create from rule options ({"maxDepth": 5, "ignore": [...]})."""
        config = DepthConfig(
            max_depth=d.get("maxDepth", d.get("max_depth", DEFAULT_MAX_DEPTH)),
            ignore=list(d.get("ignore") or []),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 0:
            raise ConfigurationError(f"{DEPTH_RULE}: maxDepth must be a non-negative integer, got {self.max_depth!r}")
        if not all(isinstance(name, str) for name in self.ignore):
            raise ConfigurationError(f"{DEPTH_RULE}: ignore must be a list of field names")

    def to_dict(self) -> dict:
        return {"maxDepth": self.max_depth, "ignore": list(self.ignore)}


@dataclass
class RuleConfig:
    """Whether a rule runs, and its options."""

    enabled: bool = True
    options: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_value(rule_id: str, value: Any) -> RuleConfig:
        """Accept `true`/`false` or an options object (optionally with "enabled")."""
        if isinstance(value, bool):
            return RuleConfig(enabled=value)
        if isinstance(value, dict):
            options = dict(value)
            enabled = options.pop("enabled", True)
            if not isinstance(enabled, bool):
                raise ConfigurationError(f"{rule_id}: enabled must be a boolean")
            return RuleConfig(enabled=enabled, options=options)
        raise ConfigurationError(f"{rule_id}: expected a boolean or an options object, got {value!r}")


def default_rules() -> dict[str, RuleConfig]:
    return {
        DEPTH_RULE: RuleConfig(enabled=True, options={"maxDepth": DEFAULT_MAX_DEPTH}),
        UNUSED_FIELDS_RULE: RuleConfig(enabled=False),
    }


@dataclass
class AnalysisConfig:
    """Configuration options for an analysis run."""

    # Schema file or directory
    schema: str = ""

    # Glob patterns of operation and fragment documents
    documents: list[str] = field(default_factory=list)

    # Rule id -> rule configuration
    rules: dict[str, RuleConfig] = field(default_factory=default_rules)

    # Directory relative paths are resolved against
    base_dir: str = "."

    # Logging
    log_level: str = "WARNING"
    log_format: str = "console"

    @staticmethod
    def from_dict(d: dict) -> AnalysisConfig:
        """Create a config from a dictionary. Unknown keys are ignored."""
        config = AnalysisConfig()
        names = {f.name for f in fields(AnalysisConfig)}
        for k, v in d.items():
            if k == "rules":
                if not isinstance(v, dict):
                    raise ConfigurationError("rules must be an object keyed by rule id")
                for rule_id, value in v.items():
                    config.rules[rule_id] = RuleConfig.from_value(rule_id, value)
            elif k == "documents" and isinstance(v, str):
                config.documents = [v]
            elif k in names:
                setattr(config, k, v)
        config.validate()
        return config

    def validate(self) -> None:
        for name in ("schema", "base_dir", "log_level", "log_format"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigurationError(f"{name} must be a string, got {value!r}")
        if not isinstance(self.documents, list) or not all(isinstance(p, str) for p in self.documents):
            raise ConfigurationError("documents must be a list of glob patterns")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        unknown = set(self.rules) - {DEPTH_RULE, UNUSED_FIELDS_RULE}
        if unknown:
            raise ConfigurationError(f"Unknown rules: {', '.join(sorted(unknown))}")
        self.depth_config().validate()

    def depth_config(self) -> DepthConfig:
        rule = self.rules.get(DEPTH_RULE, RuleConfig())
        return DepthConfig.from_dict(rule.options)

    def is_enabled(self, rule_id: str) -> bool:
        rule = self.rules.get(rule_id)
        return rule is not None and rule.enabled

    @property
    def enabled_rules(self) -> list[str]:
        return [rule_id for rule_id, rule in self.rules.items() if rule.enabled]

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "schema": self.schema,
            "documents": list(self.documents),
            "rules": {rule_id: {"enabled": rule.enabled, **rule.options} for rule_id, rule in self.rules.items()},
            "base_dir": self.base_dir,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


def load_config(path: str | Path) -> AnalysisConfig:
    """
    Load a JSON config file.

    Relative schema and document paths in the file are resolved against
    the file's directory.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {path} must contain a JSON object")

    data.setdefault("base_dir", str(path.parent))
    return AnalysisConfig.from_dict(data)
