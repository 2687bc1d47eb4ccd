import pytest

from rhyme_scope.app.services.report_formatter import (
    ReportFormatter,
    adjust_color_opacity,
    build_cell_markers,
    rhyme_count_label,
    rhyme_ratio,
)
from rhyme_scope.core import analyze_rhyme_patterns


@pytest.fixture
def end_rhyme_analysis(verse_factory):
    verse = verse_factory((["p", "ang"], "天光"), (["q", "ang"], "地上"))
    return analyze_rhyme_patterns(verse)


def test_cell_markers_and_ratio(end_rhyme_analysis):
    markers = build_cell_markers(end_rhyme_analysis)

    assert set(markers) == {(0, 1), (1, 1)}
    assert rhyme_ratio(end_rhyme_analysis) == pytest.approx(50.0)


def test_ratio_of_empty_verse_is_zero():
    assert rhyme_ratio(analyze_rhyme_patterns([])) == 0.0


def test_adjust_color_opacity():
    assert adjust_color_opacity("#FF5733", 0.2) == "rgba(255, 87, 51, 0.2)"
    with pytest.raises(ValueError):
        adjust_color_opacity("#FFF", 0.5)


@pytest.mark.parametrize(
    "length, label",
    [(1, "single rhyme"), (2, "double rhyme"), (3, "triple rhyme"), (5, "5-fold rhyme")],
)
def test_rhyme_count_label(length, label):
    assert rhyme_count_label(length) == label


def test_render_html_highlights_rhyming_characters(end_rhyme_analysis):
    html = ReportFormatter().render_html(end_rhyme_analysis)

    assert html.count('data-rhyme-id="rhyme_001"') == 2
    assert html.count('class="normal-word"') == 2
    assert "color: #FF5733" in html
    assert "rgba(255, 87, 51, 0.2)" in html
    assert "ang single rhyme" in html
    assert "no rhyme" in html
    assert '<span class="stat-value">50.0%</span>' in html
    assert html.count('class="visualization-line"') == 2


def test_render_html_escapes_text(verse_factory):
    analysis = analyze_rhyme_patterns(verse_factory((["x", "y"], "<&")))

    html = ReportFormatter().render_html(analysis)

    assert "&lt;" in html
    assert "&amp;" in html
    assert "<&" not in html


def test_render_html_rejects_other_objects():
    html = ReportFormatter().render_html({"results": []})

    assert html == '<div class="visualization-error">Invalid rhyme analysis result</div>'


def test_highlight_opacity_is_configurable(end_rhyme_analysis):
    html = ReportFormatter(highlight_opacity=0.5).render_html(end_rhyme_analysis)

    assert "rgba(255, 87, 51, 0.5)" in html


def test_markdown_summary_lists_results(end_rhyme_analysis):
    summary = ReportFormatter().render_markdown_summary(end_rhyme_analysis)

    first, blank, entry = summary.splitlines()
    assert first.startswith("**1 rhyme(s)** across 2 line(s): 1 end, 0 internal")
    assert blank == ""
    assert entry == "- `rhyme_001` 1-character end rhyme `ang`: 光 (line 1) / 上 (line 2)"


def test_markdown_summary_without_results(verse_factory):
    analysis = analyze_rhyme_patterns(verse_factory(["a", "b"]))

    assert ReportFormatter().render_markdown_summary(analysis) == "No rhymes found across 1 line(s)."
