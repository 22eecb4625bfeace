"""js-complexity - cyclomatic complexity measurement for JavaScript sources."""

__version__ = "0.1.0"

from .complexity_analysis import (
    FileComplexityAggregator,
    FileComplexityResult,
    FunctionUnit,
    JavaScriptComplexityAnalyzer,
    RangeDistributionBuilder,
    Violation,
)
from .config import RuleConfig, SensorConfig
from .exceptions import ComplexityError, ConfigError, ParseError
from .file_source import FileSystemSource, InputFile
from .rules import JsonProfileRuleSource, RuleConfigSource, StaticRuleSource
from .sensor import ComplexitySensor, SensorReport
from .sinks import CollectingSink, MeasurementSink

__all__ = [
    "ComplexitySensor",
    "SensorReport",
    "FileComplexityAggregator",
    "FileComplexityResult",
    "FunctionUnit",
    "JavaScriptComplexityAnalyzer",
    "RangeDistributionBuilder",
    "Violation",
    "RuleConfig",
    "SensorConfig",
    "RuleConfigSource",
    "StaticRuleSource",
    "JsonProfileRuleSource",
    "FileSystemSource",
    "InputFile",
    "MeasurementSink",
    "CollectingSink",
    "ComplexityError",
    "ConfigError",
    "ParseError",
    "__version__",
]
