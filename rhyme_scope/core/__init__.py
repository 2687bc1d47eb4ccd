"""Rhyme pattern detection core for RhymeScope."""

from .analyzer import RhymePatternAnalyzer, analyze_rhyme_patterns
from .assembler import COLOR_PALETTE, ResultAssembler
from .converter import RhymeConverter, convert_text_to_verse
from .errors import (
    CharInfoShapeError,
    InputLimitError,
    InputShapeError,
    LineShapeError,
    MappingLoadError,
    NotReadyError,
    OptionsError,
    RhymeScopeError,
    VerseShapeError,
)
from .extractor import SequenceExtractor
from .mapping_loader import (
    RhymeGroupInfo,
    RhymeMapping,
    RhymeMappingLoader,
    build_rhyme_mappings,
    load_rhyme_mapping,
)
from .matcher import MatchGenerator
from .models import (
    UNKNOWN_GROUP,
    AnalysisResult,
    AnalysisSummary,
    CandidateMatch,
    CandidateSpan,
    CharInfo,
    Line,
    Position,
    RhymeResult,
    RhymeType,
    Verse,
)
from .options import AnalysisOptions
from .selector import GreedySelector, Selection
from .validation import coerce_verse, validate_verse

__all__ = [
    "AnalysisOptions",
    "AnalysisResult",
    "AnalysisSummary",
    "COLOR_PALETTE",
    "CandidateMatch",
    "CandidateSpan",
    "CharInfo",
    "CharInfoShapeError",
    "GreedySelector",
    "InputLimitError",
    "InputShapeError",
    "Line",
    "LineShapeError",
    "MappingLoadError",
    "MatchGenerator",
    "NotReadyError",
    "OptionsError",
    "Position",
    "ResultAssembler",
    "RhymeConverter",
    "RhymeGroupInfo",
    "RhymeMapping",
    "RhymeMappingLoader",
    "RhymePatternAnalyzer",
    "RhymeResult",
    "RhymeScopeError",
    "RhymeType",
    "Selection",
    "SequenceExtractor",
    "UNKNOWN_GROUP",
    "Verse",
    "VerseShapeError",
    "analyze_rhyme_patterns",
    "build_rhyme_mappings",
    "coerce_verse",
    "convert_text_to_verse",
    "load_rhyme_mapping",
    "validate_verse",
]
