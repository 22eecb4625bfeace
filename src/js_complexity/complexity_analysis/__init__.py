"""Cyclomatic complexity measurement for JavaScript sources.

This package enumerates function units, scores them, and aggregates the
scores into file-level measures and fixed-range distributions.
"""

from .aggregator import FileComplexityAggregator
from .base_analyzer import BaseComplexityAnalyzer
from .distribution import (
    FILE_COMPLEXITY_BOTTOM_LIMITS,
    FUNCTION_COMPLEXITY_BOTTOM_LIMITS,
    RangeDistributionBuilder,
)
from .languages import JavaScriptComplexityAnalyzer
from .models import (
    CYCLOMATIC_COMPLEXITY_RULE_KEY,
    Distribution,
    FileComplexityResult,
    FunctionKind,
    FunctionUnit,
    Violation,
)

__all__ = [
    "BaseComplexityAnalyzer",
    "JavaScriptComplexityAnalyzer",
    "FileComplexityAggregator",
    "RangeDistributionBuilder",
    "FUNCTION_COMPLEXITY_BOTTOM_LIMITS",
    "FILE_COMPLEXITY_BOTTOM_LIMITS",
    "CYCLOMATIC_COMPLEXITY_RULE_KEY",
    "Distribution",
    "FileComplexityResult",
    "FunctionKind",
    "FunctionUnit",
    "Violation",
]
