"""Complexity sensor: measures every file of a file set and feeds a sink."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .complexity_analysis.aggregator import FileComplexityAggregator
from .complexity_analysis.models import CYCLOMATIC_COMPLEXITY_RULE_KEY, FileComplexityResult
from .config import RuleConfig
from .exceptions import ParseError
from .file_source import InputFile
from .rules import RuleConfigSource
from .sinks import MeasurementSink

logger = logging.getLogger(__name__)


@dataclass
class FileFailure:
    """A file that could not be measured."""

    path: str
    error: BaseException

    @property
    def message(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class SensorReport:
    """Outcome of a sensor run."""

    analyzed: List[str] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


class ComplexitySensor:
    """Runs the file aggregator over a file set.

    A failing file is logged and recorded in the report; it never stops the
    run. The rule configuration is resolved once, before any file is read,
    and a ConfigError raised there propagates to the caller.
    """

    LANGUAGE_KEY = "js"

    def __init__(
        self,
        aggregator: Optional[FileComplexityAggregator] = None,
        rule_key: str = CYCLOMATIC_COMPLEXITY_RULE_KEY,
        encoding: str = "utf-8",
    ):
        self.aggregator = aggregator or FileComplexityAggregator(rule_key=rule_key)
        self.rule_key = rule_key
        self.encoding = encoding

    def should_execute(self, language: str) -> bool:
        """Only JavaScript projects are measured."""
        return language == self.LANGUAGE_KEY

    def run(
        self,
        file_set: Iterable[InputFile],
        rule_source: RuleConfigSource,
        sink: MeasurementSink,
    ) -> SensorReport:
        """Measure each file in order and forward the results to the sink.

        Args:
            file_set: Files to measure
            rule_source: Source of the maximum-complexity rule settings
            sink: Receiver of the per-file measures

        Returns:
            SensorReport listing measured and failed files
        """
        rule_config = rule_source.rule_config(self.rule_key)
        report = SensorReport()

        for input_file in file_set:
            try:
                result = self.measure(input_file, rule_config)
                sink.save(input_file, result)
            except Exception as e:
                self._record_failure(report, input_file, e)
            else:
                report.analyzed.append(input_file.relative_path)

        self._log_report(report)
        return report

    async def run_concurrently(
        self,
        file_set: Iterable[InputFile],
        rule_source: RuleConfigSource,
        sink: MeasurementSink,
        max_concurrent: int = 4,
    ) -> SensorReport:
        """Measure files in worker threads, at most ``max_concurrent`` at a time.

        Each task captures its own failure so no sibling is cancelled.
        Results reach the sink in file-set order.
        """
        rule_config = rule_source.rule_config(self.rule_key)
        semaphore = asyncio.Semaphore(max_concurrent)
        files = list(file_set)

        async def measure_with_limit(
            input_file: InputFile,
        ) -> Tuple[Optional[FileComplexityResult], Optional[Exception]]:
            async with semaphore:
                try:
                    result = await asyncio.to_thread(self.measure, input_file, rule_config)
                except Exception as e:
                    return None, e
                return result, None

        outcomes = await asyncio.gather(*(measure_with_limit(f) for f in files))

        report = SensorReport()
        for input_file, (result, error) in zip(files, outcomes):
            if error is None:
                try:
                    sink.save(input_file, result)
                except Exception as e:
                    error = e
            if error is not None:
                self._record_failure(report, input_file, error)
            else:
                report.analyzed.append(input_file.relative_path)

        self._log_report(report)
        return report

    def measure(self, input_file: InputFile, rule_config: RuleConfig) -> FileComplexityResult:
        """Read and aggregate a single file."""
        source = input_file.read_text(encoding=self.encoding)
        return self.aggregator.aggregate(source, rule_config)

    def _record_failure(self, report: SensorReport, input_file: InputFile, error: Exception) -> None:
        path = input_file.relative_path
        if isinstance(error, ParseError):
            logger.error(f"Could not analyze file: {path}: {error}")
        else:
            logger.error(f"Can not analyze the file {path}", exc_info=error)
        report.failures.append(FileFailure(path=path, error=error))

    def _log_report(self, report: SensorReport) -> None:
        logger.info(
            f"Complexity measured for {len(report.analyzed)} files, {len(report.failures)} failed"
        )

    def __str__(self) -> str:
        return type(self).__name__
