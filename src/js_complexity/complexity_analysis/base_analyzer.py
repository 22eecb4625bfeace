"""Abstract base class for language-specific complexity analyzers.

This module provides the foundation for implementing function-level
complexity measurement with a consistent interface.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from .models import FunctionUnit


class BaseComplexityAnalyzer(ABC):
    """Abstract base class for language-specific complexity analyzers.

    Analyzers are pure: the same source text always yields the same
    function units, and nothing is cached between calls.
    """

    def __init__(self, language: str):
        """Initialize the analyzer with language information.

        Args:
            language: Language key this analyzer supports
        """
        self.language = language

    @abstractmethod
    def analyze(self, source: str) -> List[FunctionUnit]:
        """Enumerate the function units of a source text.

        Args:
            source: Source code to analyze

        Returns:
            Function units ordered by their position in the source

        Raises:
            ParseError: If the source cannot be parsed
        """

    @abstractmethod
    def calculate_cyclomatic_complexity(self, ast_node: Any) -> int:
        """Calculate cyclomatic complexity for a function node.

        Cyclomatic complexity measures the number of linearly independent
        paths through a function: one for the entry path plus one for each
        decision point.

        Args:
            ast_node: Syntax tree node of the function

        Returns:
            Cyclomatic complexity score
        """
