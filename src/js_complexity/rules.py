"""Rule configuration sources.

A rule source answers, for a rule key, whether the rule is active and with
which parameters. The sensor resolves the cyclomatic complexity rule once
per run.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from .complexity_analysis.models import CYCLOMATIC_COMPLEXITY_RULE_KEY
from .config import MAX_ALLOWED_COMPLEXITY_PARAM, RuleConfig
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class RuleConfigSource(ABC):
    """Read-only lookup of rule settings."""

    @abstractmethod
    def rule_config(self, rule_key: str) -> RuleConfig:
        """Resolve the settings of a rule.

        Raises:
            ConfigError: If the rule is active but its parameters are invalid
        """


class StaticRuleSource(RuleConfigSource):
    """Rule settings held in memory. A rule is active when its key is present."""

    def __init__(self, rules: Mapping[str, Mapping[str, Any]]):
        self._rules: Dict[str, Mapping[str, Any]] = dict(rules)

    @classmethod
    def with_threshold(
        cls, max_allowed_complexity: int, rule_key: str = CYCLOMATIC_COMPLEXITY_RULE_KEY
    ) -> "StaticRuleSource":
        return cls({rule_key: {MAX_ALLOWED_COMPLEXITY_PARAM: max_allowed_complexity}})

    def rule_config(self, rule_key: str) -> RuleConfig:
        params = self._rules.get(rule_key)
        if params is None:
            return RuleConfig.inactive()
        return RuleConfig.from_params(params, active=True, rule_key=rule_key)


class JsonProfileRuleSource(RuleConfigSource):
    """Rule settings read from a JSON quality profile.

    The profile lists its active rule keys and, optionally, parameters per
    rule::

        {
          "ruleKeys": ["cyclomatic_complexity"],
          "params": {"cyclomatic_complexity": {"maxAllowedComplexity": "10"}}
        }
    """

    def __init__(
        self,
        rule_keys: Iterable[str],
        params: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ):
        self.rule_keys = frozenset(rule_keys)
        self.params = dict(params or {})

    @classmethod
    def from_file(cls, path: Path) -> "JsonProfileRuleSource":
        """
        Load a profile from disk.

        Raises:
            ConfigError: If the file cannot be read or is not a valid profile
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read profile {path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in profile {path}: {e}") from e

        source = cls.from_dict(data, source=str(path))
        logger.info(f"Loaded {len(source.rule_keys)} active rules from {path}")
        return source

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "JsonProfileRuleSource":
        origin = source or "profile"
        if not isinstance(data, dict):
            raise ConfigError(f"{origin} must be a JSON object")

        rule_keys = data.get("ruleKeys", [])
        if not isinstance(rule_keys, list) or not all(isinstance(k, str) for k in rule_keys):
            raise ConfigError(f"{origin}: 'ruleKeys' must be a list of strings")

        params = data.get("params", {})
        if not isinstance(params, dict) or not all(isinstance(v, dict) for v in params.values()):
            raise ConfigError(f"{origin}: 'params' must map rule keys to objects")

        return cls(rule_keys, params)

    def rule_config(self, rule_key: str) -> RuleConfig:
        return RuleConfig.from_params(
            self.params.get(rule_key, {}),
            active=rule_key in self.rule_keys,
            rule_key=rule_key,
        )
