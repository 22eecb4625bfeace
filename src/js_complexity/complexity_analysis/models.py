"""Data models for complexity measurement results.

Provides the value objects passed between the analyzer, the file aggregator
and the measurement sinks.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

CYCLOMATIC_COMPLEXITY_RULE_KEY = "cyclomatic_complexity"


class FunctionKind:
    """Kinds of function units reported by the analyzer."""

    FUNCTION = "function"
    GENERATOR = "generator"
    ARROW = "arrow"
    METHOD = "method"


@dataclass(frozen=True)
class FunctionUnit:
    """A single measured function."""

    line: int
    complexity: int
    name: str = "<anonymous>"
    kind: str = FunctionKind.FUNCTION

    def __post_init__(self):
        if self.line < 1:
            raise ValueError(f"Function line must be positive, got {self.line}")
        if self.complexity < 0:
            raise ValueError(f"Complexity cannot be negative, got {self.complexity}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "kind": self.kind,
            "line": self.line,
            "complexity": self.complexity,
        }


def _format_limit(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Distribution:
    """Snapshot of a fixed-shape histogram.

    ``counts`` maps every configured bottom limit to the number of values
    that landed in its bucket, zero-count buckets included.
    """

    bottom_limits: Tuple[float, ...]
    counts: Mapping[float, int]

    @property
    def total(self) -> int:
        """Number of values classified into any bucket."""
        return sum(self.counts.values())

    def to_data_string(self) -> str:
        """Render as ``limit=count`` pairs joined by semicolons."""
        return ";".join(
            f"{_format_limit(limit)}={self.counts[limit]}" for limit in self.bottom_limits
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bottom_limits": list(self.bottom_limits),
            "counts": {_format_limit(limit): self.counts[limit] for limit in self.bottom_limits},
            "data": self.to_data_string(),
        }


@dataclass(frozen=True)
class Violation:
    """A function whose complexity exceeds the configured maximum."""

    line: int
    measured_complexity: int
    threshold: int
    rule_key: str = CYCLOMATIC_COMPLEXITY_RULE_KEY

    @property
    def message(self) -> str:
        return (
            f"Cyclomatic Complexity is {self.measured_complexity} "
            f"(max allowed is {self.threshold})."
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_key": self.rule_key,
            "line": self.line,
            "message": self.message,
            "measured_complexity": self.measured_complexity,
            "threshold": self.threshold,
        }


@dataclass
class FileComplexityResult:
    """Complexity measures for one analyzed file."""

    function_count: int
    total_complexity: int
    average_function_complexity: Optional[float]
    file_distribution: Distribution
    function_distribution: Distribution
    violations: Tuple[Violation, ...] = ()
    functions: Tuple[FunctionUnit, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization.

        The average is left out entirely for files without functions.
        """
        result = {
            "function_count": self.function_count,
            "total_complexity": self.total_complexity,
            "file_complexity_distribution": self.file_distribution.to_dict(),
            "function_complexity_distribution": self.function_distribution.to_dict(),
            "functions": [f.to_dict() for f in self.functions],
            "violations": [v.to_dict() for v in self.violations],
        }
        if self.average_function_complexity is not None:
            result["average_function_complexity"] = round(self.average_function_complexity, 2)
        return result
