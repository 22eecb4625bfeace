"""Language-specific complexity analyzer implementations."""

from .javascript_analyzer import JavaScriptComplexityAnalyzer

__all__ = ["JavaScriptComplexityAnalyzer"]
