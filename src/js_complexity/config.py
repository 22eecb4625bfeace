"""Configuration for js-complexity."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .exceptions import ConfigError

MAX_ALLOWED_COMPLEXITY_PARAM = "maxAllowedComplexity"


@dataclass(frozen=True)
class RuleConfig:
    """Settings of the maximum-complexity rule for one analysis run."""

    active: bool = False
    max_allowed_complexity: Optional[int] = None

    def __post_init__(self):
        """Validate the threshold of an active rule."""
        if not self.active:
            return
        threshold = self.max_allowed_complexity
        if isinstance(threshold, bool) or not isinstance(threshold, int):
            raise ConfigError(
                f"Active rule requires an integer {MAX_ALLOWED_COMPLEXITY_PARAM}, got {threshold!r}"
            )
        if threshold < 1:
            raise ConfigError(
                f"{MAX_ALLOWED_COMPLEXITY_PARAM} must be a positive integer, got {threshold}"
            )

    @classmethod
    def inactive(cls) -> "RuleConfig":
        return cls(active=False)

    @classmethod
    def with_threshold(cls, max_allowed_complexity: int) -> "RuleConfig":
        return cls(active=True, max_allowed_complexity=max_allowed_complexity)

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        active: bool = True,
        rule_key: str = "cyclomatic_complexity",
    ) -> "RuleConfig":
        """
        Create rule config from raw rule parameters.

        Args:
            params: Parameter values as stored by the rule profile, usually strings
            active: Whether the rule is enabled
            rule_key: Rule identifier, used in error messages

        Returns:
            RuleConfig instance

        Raises:
            ConfigError: If the rule is active and its threshold is missing or not numeric
        """
        if not active:
            return cls.inactive()

        raw = params.get(MAX_ALLOWED_COMPLEXITY_PARAM)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            raise ConfigError(
                f"Rule '{rule_key}' is active but has no {MAX_ALLOWED_COMPLEXITY_PARAM} parameter"
            )

        try:
            threshold = int(str(raw).strip())
        except ValueError as e:
            raise ConfigError(
                f"Rule '{rule_key}' has a non-numeric {MAX_ALLOWED_COMPLEXITY_PARAM}: {raw!r}"
            ) from e

        return cls(active=True, max_allowed_complexity=threshold)


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


@dataclass
class SensorConfig:
    """Main configuration for a complexity run."""

    max_allowed_complexity: Optional[int] = None
    max_concurrent: int = 1
    file_suffixes: tuple = (".js",)
    use_gitignore: bool = True
    profile_path: Optional[Path] = None

    def __post_init__(self):
        if self.max_concurrent < 1:
            raise ConfigError(f"max_concurrent must be at least 1, got {self.max_concurrent}")
        suffixes = []
        for suffix in self.file_suffixes:
            suffix = suffix.strip().lower()
            if suffix:
                suffixes.append(suffix if suffix.startswith(".") else f".{suffix}")
        self.file_suffixes = tuple(suffixes)

    @classmethod
    def from_env(cls) -> "SensorConfig":
        """Create configuration from environment variables."""
        suffixes = os.getenv("JS_COMPLEXITY_SUFFIXES", ".js")
        profile = os.getenv("JS_COMPLEXITY_PROFILE")

        return cls(
            max_allowed_complexity=_int_from_env("JS_COMPLEXITY_MAX", None),
            max_concurrent=_int_from_env("JS_COMPLEXITY_WORKERS", 1),
            file_suffixes=tuple(suffixes.split(",")),
            use_gitignore=os.getenv("JS_COMPLEXITY_USE_GITIGNORE", "true").lower()
            not in ("0", "false", "no"),
            profile_path=Path(profile) if profile else None,
        )

    def rule_source(self):
        """Build the rule configuration source for this run.

        A profile file takes precedence over a plain threshold; with neither
        the rule is inactive.
        """
        from .rules import JsonProfileRuleSource, StaticRuleSource

        if self.profile_path is not None:
            return JsonProfileRuleSource.from_file(self.profile_path)
        if self.max_allowed_complexity is not None:
            return StaticRuleSource.with_threshold(self.max_allowed_complexity)
        return StaticRuleSource({})
