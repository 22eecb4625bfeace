"""File-level aggregation of function complexity."""

import logging
from typing import Optional, Sequence

from ..config import RuleConfig
from .base_analyzer import BaseComplexityAnalyzer
from .distribution import (
    FILE_COMPLEXITY_BOTTOM_LIMITS,
    FUNCTION_COMPLEXITY_BOTTOM_LIMITS,
    RangeDistributionBuilder,
)
from .models import CYCLOMATIC_COMPLEXITY_RULE_KEY, FileComplexityResult, Violation

logger = logging.getLogger(__name__)


class FileComplexityAggregator:
    """Turns one file's source into file-level complexity measures.

    Distribution builders are created per call, so a single aggregator can
    be shared between concurrent workers.
    """

    def __init__(
        self,
        analyzer: Optional[BaseComplexityAnalyzer] = None,
        function_bottom_limits: Sequence[float] = FUNCTION_COMPLEXITY_BOTTOM_LIMITS,
        file_bottom_limits: Sequence[float] = FILE_COMPLEXITY_BOTTOM_LIMITS,
        rule_key: str = CYCLOMATIC_COMPLEXITY_RULE_KEY,
    ):
        if analyzer is None:
            from .languages import JavaScriptComplexityAnalyzer

            analyzer = JavaScriptComplexityAnalyzer()
        self.analyzer = analyzer
        self.function_bottom_limits = tuple(function_bottom_limits)
        self.file_bottom_limits = tuple(file_bottom_limits)
        self.rule_key = rule_key

    def aggregate(self, source: str, rule_config: Optional[RuleConfig] = None) -> FileComplexityResult:
        """Measure a file's source text.

        Args:
            source: Source code of the file
            rule_config: Maximum-complexity rule settings; inactive when omitted

        Returns:
            FileComplexityResult for the file

        Raises:
            ParseError: If the analyzer cannot parse the source
        """
        functions = self.analyzer.analyze(source)

        function_count = len(functions)
        total_complexity = sum(f.complexity for f in functions)
        average = total_complexity / function_count if function_count else None

        file_distribution = RangeDistributionBuilder(self.file_bottom_limits)
        file_distribution.add(total_complexity)

        function_distribution = RangeDistributionBuilder(self.function_bottom_limits)
        for function in functions:
            function_distribution.add(function.complexity)

        violations = ()
        if rule_config is not None and rule_config.active:
            threshold = rule_config.max_allowed_complexity
            violations = tuple(
                Violation(
                    line=f.line,
                    measured_complexity=f.complexity,
                    threshold=threshold,
                    rule_key=self.rule_key,
                )
                for f in functions
                if f.complexity > threshold
            )

        logger.debug(
            f"Measured {function_count} functions, total complexity {total_complexity}, "
            f"{len(violations)} violations"
        )

        return FileComplexityResult(
            function_count=function_count,
            total_complexity=total_complexity,
            average_function_complexity=average,
            file_distribution=file_distribution.build(),
            function_distribution=function_distribution.build(),
            violations=violations,
            functions=tuple(functions),
        )
