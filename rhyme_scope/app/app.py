"""Application wiring for the RhymeScope project."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

if __package__ in {None, ""}:
    import sys

    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from rhyme_scope.core import (
    AnalysisOptions,
    AnalysisResult,
    RhymeMappingLoader,
    Verse,
)
from rhyme_scope.utils.logging_config import configure_logging
from rhyme_scope.utils.observability import get_logger
from rhyme_scope.utils.telemetry import StructuredTelemetry, TelemetryLogger

from rhyme_scope.app.services.analysis_service import VerseAnalysisService
from rhyme_scope.app.ui.gradio import create_interface

MAPPINGS_ENV_VAR = "RHYME_SCOPE_MAPPINGS"
MAX_LINES_ENV_VAR = "RHYME_SCOPE_MAX_LINES"
SHARE_ENV_VAR = "RHYME_SCOPE_SHARE"


def _env_positive_int(name: str) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


class RhymeScopeApp:
    """High-level facade bundling the mapping, service and UI."""

    def __init__(
        self,
        mappings_path: Optional[Path | str] = None,
        *,
        loader: Optional[RhymeMappingLoader] = None,
        default_options: Optional[AnalysisOptions] = None,
        service: Optional[VerseAnalysisService] = None,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        if mappings_path is None:
            mappings_path = os.environ.get(MAPPINGS_ENV_VAR) or None
        self._logger = get_logger(__name__).bind(component="app_facade")
        self._logger.info(
            "Initialising application facade",
            context={"mappings_path": str(mappings_path) if mappings_path else "default"},
        )

        self.loader = loader or RhymeMappingLoader(mappings_path)
        try:
            self.mapping = self.loader.load()
        except Exception as exc:
            self._logger.error("Rhyme mapping initialisation failed", context={"error": str(exc)})
            raise

        if default_options is None:
            default_options = AnalysisOptions(max_lines=_env_positive_int(MAX_LINES_ENV_VAR))

        if service is None:
            telemetry = telemetry or StructuredTelemetry(listeners=[TelemetryLogger()])
            service = VerseAnalysisService(
                self.mapping,
                default_options=default_options,
                telemetry=telemetry,
            )
        self.service = service

        self._logger.info(
            "Application dependencies wired",
            context={"mapping_entries": len(self.mapping), "mapping_source": self.mapping.source},
        )

    # Public API ------------------------------------------------------------
    def convert_text(self, text: str) -> Verse:
        return self.service.convert_text(text)

    def analyze_text(self, text: str, **options: Any) -> AnalysisResult:
        return self.service.analyze_text(text, **options)

    def render_html(self, analysis: AnalysisResult) -> str:
        return self.service.render_html(analysis)

    def create_gradio_interface(self):
        return create_interface(self.service)


def _should_share_interface() -> bool:
    """Return whether the Gradio UI should request a public share link."""

    normalized = os.environ.get(SHARE_ENV_VAR, "").strip().lower()
    return normalized in {"1", "true", "yes", "on"}


def main() -> None:
    configure_logging()
    app = RhymeScopeApp()
    interface = app.create_gradio_interface()
    interface.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=_should_share_interface(),
    )


__all__ = ["RhymeScopeApp", "main"]


if __name__ == "__main__":
    main()
