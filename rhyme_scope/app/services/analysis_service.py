"""Service orchestrating text conversion, rhyme analysis and rendering."""

from __future__ import annotations

import threading
from copy import deepcopy
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar, Union

from rhyme_scope.core import (
    AnalysisOptions,
    AnalysisResult,
    RhymeConverter,
    RhymeMapping,
    RhymePatternAnalyzer,
    Verse,
)

from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry
from .report_formatter import ReportFormatter

T = TypeVar("T")
OptionsLike = Union[AnalysisOptions, Mapping[str, Any], None]


class VerseAnalysisService:
    """Run analyses with logging, metrics, tracing and telemetry around them.

    Errors from conversion or analysis are logged, counted and recorded on
    the active span, then re-raised unchanged. Each request records into its
    own fork of ``telemetry`` so concurrent requests never share a trace.
    """

    def __init__(
        self,
        mapping: RhymeMapping,
        *,
        default_options: OptionsLike = None,
        formatter: Optional[ReportFormatter] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.mapping = mapping
        self.converter = RhymeConverter(mapping)
        self.default_options = AnalysisOptions.coerce(default_options)
        self.formatter = formatter or ReportFormatter()
        self.telemetry = telemetry or StructuredTelemetry()
        self._latest_trace: Dict[str, Any] = {}
        self._trace_lock = threading.Lock()

        self._logger = get_logger(__name__).bind(
            component="verse_analysis_service",
            mapping_source=mapping.source,
        )
        self._metric_requests = create_counter(
            "rhyme_scope_analysis_requests_total",
            "Total verse analysis requests received.",
            label_names=("source",),
        )
        self._metric_failures = create_counter(
            "rhyme_scope_analysis_failures_total",
            "Verse analysis requests that raised an exception.",
            label_names=("source", "error"),
        )
        self._metric_duration = create_histogram(
            "rhyme_scope_analysis_seconds",
            "Latency of verse analysis requests.",
            label_names=("source",),
        )
        self._metric_results = create_counter(
            "rhyme_scope_rhyme_results_total",
            "Committed rhyme results by rhyme type.",
            label_names=("rhyme_type",),
        )

    # Public API ------------------------------------------------------------
    def resolve_options(self, options: OptionsLike = None, **overrides: Any) -> AnalysisOptions:
        base = self.default_options if options is None else AnalysisOptions.coerce(options)
        return base.merged(overrides) if overrides else base

    def convert_text(self, text: Any) -> Verse:
        return self.converter.convert(text)

    def analyze_text(self, text: Any, options: OptionsLike = None, **overrides: Any) -> AnalysisResult:
        """Convert ``text`` to a verse and analyse it."""

        resolved = self.resolve_options(options, **overrides)
        return self._analyze_text(text, resolved, self.telemetry.fork())

    def analyze_verse(self, verse: Any, options: OptionsLike = None, **overrides: Any) -> AnalysisResult:
        """Analyse an already labelled verse."""

        resolved = self.resolve_options(options, **overrides)
        telemetry = self.telemetry.fork()
        analysis = self._instrumented(
            "verse",
            {"source": "verse"},
            telemetry,
            lambda: self._analyze(verse, resolved, telemetry),
        )
        self._remember(telemetry.snapshot())
        return analysis

    def render_html(self, analysis: AnalysisResult) -> str:
        return self.formatter.render_html(analysis)

    def render_summary(self, analysis: AnalysisResult) -> str:
        return self.formatter.render_markdown_summary(analysis)

    def analyze_and_render(
        self, text: Any, options: OptionsLike = None, **overrides: Any
    ) -> Tuple[AnalysisResult, str]:
        analysis, html, _ = self.analyze_and_render_traced(text, options, **overrides)
        return analysis, html

    def analyze_and_render_traced(
        self, text: Any, options: OptionsLike = None, **overrides: Any
    ) -> Tuple[AnalysisResult, str, Dict[str, Any]]:
        """Analyse and render ``text``, also returning this request's telemetry."""

        resolved = self.resolve_options(options, **overrides)
        telemetry = self.telemetry.fork()
        analysis = self._analyze_text(text, resolved, telemetry)
        with telemetry.timer("analysis.render"):
            html = self.render_html(analysis)
        snapshot = telemetry.snapshot()
        self._remember(snapshot)
        return analysis, html, snapshot

    def get_latest_telemetry(self) -> Dict[str, Any]:
        """Telemetry of the most recently finished request."""

        with self._trace_lock:
            return deepcopy(self._latest_trace)

    # Internal helpers ------------------------------------------------------
    def _remember(self, snapshot: Dict[str, Any]) -> None:
        with self._trace_lock:
            self._latest_trace = snapshot

    def _analyze_text(
        self, text: Any, options: AnalysisOptions, telemetry: StructuredTelemetry
    ) -> AnalysisResult:
        context = {"source": "text", "characters": len(text) if isinstance(text, str) else None}

        def _run() -> AnalysisResult:
            with telemetry.timer("analysis.convert") as details:
                verse = self.converter.convert(text)
                details["lines"] = len(verse)
            return self._analyze(verse, options, telemetry)

        analysis = self._instrumented("text", context, telemetry, _run)
        self._remember(telemetry.snapshot())
        return analysis

    def _analyze(
        self, verse: Any, options: AnalysisOptions, telemetry: StructuredTelemetry
    ) -> AnalysisResult:
        with telemetry.timer("analysis.match") as details:
            analysis = RhymePatternAnalyzer(options).analyze(verse)
            details["results"] = len(analysis.results)
        return analysis

    def _instrumented(
        self,
        source: str,
        context: Dict[str, Any],
        telemetry: StructuredTelemetry,
        operation: Callable[[], T],
    ) -> T:
        telemetry.start_trace(f"analyze_{source}")
        telemetry.increment("analysis.invoked")
        self._metric_requests.labels(source=source).inc()
        self._logger.info("Analysis request received", context=context)

        with start_span("rhyme_scope.analysis", context) as span:
            try:
                with self._metric_duration.labels(source=source).time():
                    analysis = operation()
            except Exception as exc:
                failure_context = dict(context)
                failure_context["error"] = str(exc)
                failure_context["error_type"] = type(exc).__name__
                self._metric_failures.labels(source=source, error=type(exc).__name__).inc()
                self._logger.error("Analysis request failed", context=failure_context)
                record_exception(span, exc)
                telemetry.increment("analysis.failed")
                self._remember(telemetry.snapshot())
                raise

            summary = analysis.summary
            counts = {
                "lines": summary.total_lines,
                "rhymes": summary.total_rhyme_count,
                "end_rhyme": summary.end_rhyme,
                "internal_rhyme": summary.internal_rhyme,
            }
            for result in analysis.results:
                self._metric_results.labels(rhyme_type=result.rhyme_type.value).inc()
            add_span_attributes(span, {f"result.{key}": value for key, value in counts.items()})
            telemetry.annotate("result.counts", counts)
            self._logger.info("Analysis request completed", context=counts)
            return analysis


__all__ = ["VerseAnalysisService"]
