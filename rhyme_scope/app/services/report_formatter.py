"""Rendering of analysis results into HTML and Markdown."""

from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Tuple

from rhyme_scope.core.models import AnalysisResult, CharInfo, RhymeResult

CellMarkers = Dict[Tuple[int, int], List[RhymeResult]]

_COUNT_NAMES = {1: "single", 2: "double", 3: "triple"}


def build_cell_markers(analysis: AnalysisResult) -> CellMarkers:
    """Map every ``(line, char)`` cell to the results whose positions cover it."""

    markers: CellMarkers = {}
    for result in analysis.results:
        for cell in result.cells():
            markers.setdefault(cell, []).append(result)
    return markers


def rhyme_ratio(analysis: AnalysisResult) -> float:
    """Percentage of characters that belong to at least one rhyme."""

    total_chars = analysis.verse.total_chars
    if not total_chars:
        return 0.0
    rhyming = {cell for result in analysis.results for cell in result.cells()}
    return len(rhyming) / total_chars * 100


def adjust_color_opacity(color: str, opacity: float) -> str:
    """Convert ``#RRGGBB`` into an ``rgba()`` string with ``opacity``."""

    hex_value = color.lstrip("#")
    if len(hex_value) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {color!r}")
    red, green, blue = (int(hex_value[index : index + 2], 16) for index in (0, 2, 4))
    return f"rgba({red}, {green}, {blue}, {opacity})"


def rhyme_count_label(length: int) -> str:
    return f"{_COUNT_NAMES.get(length, f'{length}-fold')} rhyme"


class ReportFormatter:
    """Render an :class:`AnalysisResult` for people to read."""

    def __init__(self, highlight_opacity: float = 0.2) -> None:
        self.highlight_opacity = highlight_opacity

    def render_html(self, analysis: Any) -> str:
        if not isinstance(analysis, AnalysisResult):
            return '<div class="visualization-error">Invalid rhyme analysis result</div>'

        markers = build_cell_markers(analysis)
        parts: List[str] = ['<div class="rhyme-report"><div class="rhyme-visualization">']
        parts.append('<div class="visualization-lyrics">')
        for line_index, line in enumerate(analysis.verse):
            parts.append('<div class="visualization-line">')
            for char_index, info in enumerate(line.chars):
                parts.append(self._render_char(info, markers.get((line_index, char_index), [])))
            parts.append("</div>")
        parts.append("</div>")
        parts.append(self._render_stats(analysis))
        parts.append("</div></div>")
        return "".join(parts)

    def _render_char(self, info: CharInfo, markers: List[RhymeResult]) -> str:
        char = escape(info.character)
        reading = f"{char} {escape(info.transcription)}"
        if not markers:
            return (
                '<div class="char-hover-container">'
                f'<span class="normal-word">{char}</span>'
                '<div class="char-tooltip"><div class="tooltip-content">'
                f'<div class="tooltip-pinyin">{reading}</div>'
                '<div class="tooltip-groups"><div class="normal-group">no rhyme</div></div>'
                "</div></div></div>"
            )

        # The first result touching a cell decides its color.
        marker = markers[0]
        color = escape(marker.color)
        tint = adjust_color_opacity(marker.color, self.highlight_opacity)
        sequence = escape(" ".join(marker.sequence))
        count = rhyme_count_label(marker.sequence_length)
        return (
            '<div class="char-hover-container">'
            f'<span class="rhyme-word" style="color: {color}; background-color: {tint}; '
            f'border-bottom: 2px solid {color};" data-rhyme-id="{escape(marker.id)}">{char}</span>'
            '<div class="char-tooltip">'
            f'<div class="tooltip-content" style="border: 2px solid {color};">'
            f'<div class="tooltip-pinyin">{reading}</div>'
            '<div class="tooltip-groups">'
            f'<div class="normal-group" style="color: {color}; background-color: {tint};">'
            f"{sequence} {count}</div>"
            "</div></div></div></div>"
        )

    @staticmethod
    def _render_stats(analysis: AnalysisResult) -> str:
        summary = analysis.summary
        return (
            '<div class="rhyme-stats">'
            f'<div class="stat-item">Rhyming characters: '
            f'<span class="stat-value">{rhyme_ratio(analysis):.1f}%</span></div>'
            f'<div class="stat-item">End rhymes: '
            f'<span class="stat-value">{summary.end_rhyme}</span></div>'
            f'<div class="stat-item">Internal rhymes: '
            f'<span class="stat-value">{summary.internal_rhyme}</span></div>'
            "</div>"
        )

    def render_markdown_summary(self, analysis: AnalysisResult) -> str:
        summary = analysis.summary
        if not analysis.results:
            return f"No rhymes found across {summary.total_lines} line(s)."

        lines = [
            f"**{summary.total_rhyme_count} rhyme(s)** across {summary.total_lines} line(s): "
            f"{summary.end_rhyme} end, {summary.internal_rhyme} internal "
            f"({rhyme_ratio(analysis):.1f}% of characters rhyme).",
            "",
        ]
        for result in analysis.results:
            first, second = result.positions
            left = "".join(result.characters[0])
            right = "".join(result.characters[1])
            lines.append(
                f"- `{result.id}` {result.label} `{' '.join(result.sequence)}`: "
                f"{left} (line {first.line + 1}) / {right} (line {second.line + 1})"
            )
        return "\n".join(lines)


__all__ = [
    "CellMarkers",
    "ReportFormatter",
    "adjust_color_opacity",
    "build_cell_markers",
    "rhyme_count_label",
    "rhyme_ratio",
]
