"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import gradio as gr

from rhyme_scope.core import RhymeScopeError

from ..services.analysis_service import VerseAnalysisService

_EMPTY_RESULT_HTML = '<p class="rs-empty">The highlighted verse will appear here.</p>'


def _format_stage_timings(snapshot: Dict[str, Any]) -> str:
    """Return a markdown list of stage timings from a telemetry snapshot."""

    events = (snapshot or {}).get("events") or []
    if not events:
        return ""

    output: List[str] = ["#### Analysis stages"]
    for event in events[-8:]:
        name = str(event.get("name", "stage"))
        duration = event.get("duration")
        metadata = event.get("metadata") or {}
        details = ", ".join(f"{key}={value}" for key, value in metadata.items())
        suffix = f" ({details})" if details else ""
        if isinstance(duration, (int, float)):
            output.append(f"- `{name}` took {float(duration) * 1000:.1f} ms{suffix}")
        else:
            output.append(f"- `{name}`{suffix}")
    return "\n".join(output)


def create_interface(service: VerseAnalysisService) -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    defaults = service.default_options

    def analyze_interface(
        text: str,
        detect_inter_line: bool,
        detect_internal: bool,
        inter_line_tolerance: float,
        line_diff_tolerance: float,
        internal_tolerance: float,
    ) -> Tuple[str, str, str]:
        if not text or not text.strip():
            return ("Enter some lyrics to analyse.", "", _EMPTY_RESULT_HTML)

        try:
            analysis, html, snapshot = service.analyze_and_render_traced(
                text,
                detect_end_rhyme=True,
                detect_inter_line_rhyme=bool(detect_inter_line),
                detect_internal_rhyme=bool(detect_internal),
                inter_line_tolerance=int(inter_line_tolerance),
                inter_line_line_diff_tolerance=int(line_diff_tolerance),
                internal_rhyme_tolerance=int(internal_tolerance),
            )
        except RhymeScopeError as exc:
            return (
                f"Analysis failed: {exc}",
                "",
                _EMPTY_RESULT_HTML,
            )

        return (
            service.render_summary(analysis),
            _format_stage_timings(snapshot),
            html,
        )

    interface_css = """
    .rs-container {max-width: 1200px; margin: 0 auto; gap: 24px;}
    .rs-hero {text-align: center; padding-bottom: 12px;}
    .rs-panel {border: 1px solid rgba(15, 23, 42, 0.08); border-radius: 16px; padding: 20px;}
    .rs-empty {color: #94a3b8; font-style: italic;}
    .visualization-line {display: flex; flex-wrap: wrap; margin-bottom: 6px; font-size: 1.4rem;}
    .char-hover-container {position: relative; display: inline-block;}
    .char-tooltip {display: none; position: absolute; z-index: 10; top: 100%; left: 0;}
    .char-hover-container:hover .char-tooltip {display: block;}
    .tooltip-content {background: #ffffff; border-radius: 8px; padding: 6px 10px; font-size: 0.85rem; white-space: nowrap;}
    .rhyme-stats {margin-top: 16px; color: #334155; display: flex; gap: 16px;}
    """

    with gr.Blocks(title="RhymeScope - Verse Rhyme Analysis", css=interface_css) as interface:
        with gr.Column(elem_classes=["rs-container"]):
            gr.Markdown(
                "<h2>RhymeScope</h2>\n"
                "<p>Highlight end rhymes, cross-line rhymes and internal rhymes in Chinese lyrics.</p>",
                elem_classes=["rs-hero"],
            )
            with gr.Row():
                with gr.Column(elem_classes=["rs-panel"]):
                    text_input = gr.Textbox(
                        label="Lyrics",
                        placeholder="床前明月光\n疑是地上霜",
                        lines=10,
                    )
                    with gr.Accordion("Detection settings", open=False):
                        detect_inter_line = gr.Checkbox(
                            value=defaults.detect_inter_line_rhyme,
                            label="Detect rhymes between lines (not at line end)",
                        )
                        detect_internal = gr.Checkbox(
                            value=defaults.detect_internal_rhyme,
                            label="Detect rhymes within a line",
                        )
                        inter_line_tolerance = gr.Slider(
                            minimum=0,
                            maximum=5,
                            step=1,
                            value=defaults.inter_line_tolerance,
                            label="Position tolerance between lines",
                        )
                        line_diff_tolerance = gr.Slider(
                            minimum=1,
                            maximum=8,
                            step=1,
                            value=defaults.inter_line_line_diff_tolerance,
                            label="Maximum line distance",
                        )
                        internal_tolerance = gr.Slider(
                            minimum=0,
                            maximum=3,
                            step=1,
                            value=defaults.internal_rhyme_tolerance,
                            label="Extra gap allowed within a line",
                        )
                    analyze_btn = gr.Button("Analyse rhymes", variant="primary")

                with gr.Column(elem_classes=["rs-panel"]):
                    result_html = gr.HTML(value=_EMPTY_RESULT_HTML)
                    summary_md = gr.Markdown(value="Waiting for lyrics.")
                    stages_md = gr.Markdown(value="")

        inputs = [
            text_input,
            detect_inter_line,
            detect_internal,
            inter_line_tolerance,
            line_diff_tolerance,
            internal_tolerance,
        ]
        outputs = [summary_md, stages_md, result_html]
        analyze_btn.click(fn=analyze_interface, inputs=inputs, outputs=outputs)
        text_input.change(fn=analyze_interface, inputs=inputs, outputs=outputs)
        for control in inputs[1:]:
            control.change(fn=analyze_interface, inputs=inputs, outputs=outputs)

    return interface


__all__ = ["create_interface"]
