"""Measurement sinks receiving per-file complexity results."""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .complexity_analysis.distribution import (
    FILE_COMPLEXITY_BOTTOM_LIMITS,
    FUNCTION_COMPLEXITY_BOTTOM_LIMITS,
    RangeDistributionBuilder,
)
from .complexity_analysis.models import Distribution, FileComplexityResult, Violation
from .file_source import InputFile

logger = logging.getLogger(__name__)


class MeasurementSink(ABC):
    """Receives the measures of each successfully analyzed file."""

    @abstractmethod
    def save(self, input_file: InputFile, result: FileComplexityResult) -> None:
        """Store the measures, distributions and violations of one file."""


@dataclass
class ProjectSummary:
    """Complexity roll-up over all saved files."""

    file_count: int
    function_count: int
    total_complexity: int
    average_function_complexity: Optional[float]
    function_distribution: Distribution
    file_distribution: Distribution
    violation_count: int

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "file_count": self.file_count,
            "function_count": self.function_count,
            "total_complexity": self.total_complexity,
            "function_complexity_distribution": self.function_distribution.to_dict(),
            "file_complexity_distribution": self.file_distribution.to_dict(),
            "violation_count": self.violation_count,
        }
        if self.average_function_complexity is not None:
            result["average_function_complexity"] = round(self.average_function_complexity, 2)
        return result


class CollectingSink(MeasurementSink):
    """Keeps every file result in memory and maintains project totals.

    ``save`` may be called from several worker threads; the project-level
    distributions are only merged while holding the sink's lock.
    """

    def __init__(
        self,
        function_bottom_limits: Sequence[float] = FUNCTION_COMPLEXITY_BOTTOM_LIMITS,
        file_bottom_limits: Sequence[float] = FILE_COMPLEXITY_BOTTOM_LIMITS,
    ):
        self._lock = threading.Lock()
        self._results: Dict[str, FileComplexityResult] = {}
        self._function_distribution = RangeDistributionBuilder(function_bottom_limits)
        self._file_distribution = RangeDistributionBuilder(file_bottom_limits)
        self._function_count = 0
        self._total_complexity = 0
        self._violation_count = 0

    def save(self, input_file: InputFile, result: FileComplexityResult) -> None:
        path = input_file.relative_path
        with self._lock:
            if path in self._results:
                raise ValueError(f"Measures already saved for {path}")
            self._function_distribution.add_distribution(result.function_distribution)
            self._file_distribution.add_distribution(result.file_distribution)
            self._results[path] = result
            self._function_count += result.function_count
            self._total_complexity += result.total_complexity
            self._violation_count += len(result.violations)
        logger.debug(f"Saved measures for {path}")

    @property
    def results(self) -> Dict[str, FileComplexityResult]:
        with self._lock:
            return dict(self._results)

    def violations(self) -> List[Tuple[str, Violation]]:
        """All violations as (path, violation) pairs, in save order."""
        with self._lock:
            return [(path, v) for path, result in self._results.items() for v in result.violations]

    def summary(self) -> ProjectSummary:
        with self._lock:
            average = (
                self._total_complexity / self._function_count if self._function_count else None
            )
            return ProjectSummary(
                file_count=len(self._results),
                function_count=self._function_count,
                total_complexity=self._total_complexity,
                average_function_complexity=average,
                function_distribution=self._function_distribution.build(),
                file_distribution=self._file_distribution.build(),
                violation_count=self._violation_count,
            )
