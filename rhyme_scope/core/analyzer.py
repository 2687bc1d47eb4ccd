"""Entry point running the rhyme pattern pipeline over a verse."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from rhyme_scope.utils.observability import get_logger

from .assembler import ResultAssembler
from .errors import InputLimitError
from .extractor import SequenceExtractor
from .matcher import MatchGenerator
from .models import AnalysisResult, AnalysisSummary, Verse
from .options import AnalysisOptions
from .selector import GreedySelector
from .validation import coerce_verse

OptionsLike = Union[AnalysisOptions, Mapping[str, Any], None]


class RhymePatternAnalyzer:
    """Extract spans, pair them, select greedily and assemble results.

    The analyzer holds only its options; every call builds its own working
    state, so one instance may serve concurrent callers.
    """

    def __init__(self, options: OptionsLike = None, **overrides: Any) -> None:
        self.options = AnalysisOptions.coerce(options, **overrides)
        self.extractor = SequenceExtractor()
        self.matcher = MatchGenerator(self.options)
        self.selector = GreedySelector()
        self.assembler = ResultAssembler()
        self._logger = get_logger(__name__).bind(component="rhyme_pattern_analyzer")

    def analyze(self, verse: Any) -> AnalysisResult:
        validated = coerce_verse(verse)
        self._check_limits(validated)

        if not len(validated):
            return AnalysisResult(verse=validated, results=(), summary=AnalysisSummary())

        spans = self.extractor.extract(validated)
        matches = self.matcher.generate(spans, validated)
        selection = self.selector.select(matches)
        results = self.assembler.assemble(validated, selection)
        summary = self.assembler.summarize(validated, selection)

        self._logger.debug(
            "Rhyme analysis completed",
            context={
                "lines": summary.total_lines,
                "spans": len(spans),
                "candidates": len(matches),
                "committed": summary.total_rhyme_count,
            },
        )
        return AnalysisResult(verse=validated, results=tuple(results), summary=summary)

    def _check_limits(self, verse: Verse) -> None:
        max_lines = self.options.max_lines
        if max_lines is not None and len(verse) > max_lines:
            raise InputLimitError(f"Verse has {len(verse)} lines; the limit is {max_lines}")
        max_length = self.options.max_line_length
        if max_length is None:
            return
        for index, line in enumerate(verse):
            if len(line) > max_length:
                raise InputLimitError(
                    f"Line {index} has {len(line)} characters; the limit is {max_length}"
                )


def analyze_rhyme_patterns(
    verse: Any,
    options: OptionsLike = None,
    **overrides: Any,
) -> AnalysisResult:
    """Analyse ``verse`` and return every committed rhyme with a summary.

    ``options`` may be an :class:`AnalysisOptions`, a mapping using the
    snake_case or camelCase option names, or ``None``; keyword overrides are
    applied on top. Invalid input raises before any analysis runs.
    """

    return RhymePatternAnalyzer(options, **overrides).analyze(verse)


__all__ = ["RhymePatternAnalyzer", "analyze_rhyme_patterns"]
