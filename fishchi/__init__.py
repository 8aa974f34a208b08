"""
fishchi - Citation parsing and rendering for Persian and English sources

Parses free-form citations into structured records and renders records back
into in-text citations and reference lists.

Usage:
    from fishchi import parse_citation, render_in_text, render_bibliography

    # Parse (detect → extract → score)
    result = parse_citation("Smith, J., & Johnson, M. (2024). The impact of ...")
    result.record.authors, result.detected_style, result.confidence

    # Render
    record = result.record
    record.id = "src1"
    render_in_text([record], "apa", cited_ids=["src1"])       # (Smith & Johnson, 2024)
    render_bibliography([record], "vancouver", order=["src1"])

Architecture:
    ┌─────────────────────────────────────────┐
    │ PARSE: CitationParser (parser.py)       │
    │   detectors.py → extractors.py → names  │
    └─────────────────┬───────────────────────┘
                      ▼
            ┌─────────────────────┐
            │ BibliographicRecord │
            │ (models.py)         │
            └──────────┬──────────┘
                       ▼
    ┌─────────────────────────────────────────┐
    │ RENDER: renderer.py                     │
    │   formatters/ → localizer.py            │
    │   VancouverOrder per document           │
    └─────────────────────────────────────────┘

Modules:
    - models.py: Data structures (BibliographicRecord, Author, CitationStyle, LanguageTag)
    - config.py: Constants, name tables, localization table
    - names.py: Persian / English author name segmentation
    - detectors.py: Style and language detection
    - extractors.py: Positional field extraction
    - parser.py: Parse entry point and confidence score
    - formatters/: Citation style implementations and rendering backend
    - localizer.py: English → Persian connector substitution
    - renderer.py: In-text citations, bibliographies, Vancouver numbering
    - service.py: format / convert-style orchestration
    - engines/doi.py: Crossref lookup by DOI
    - exporters.py: Word (.docx) bibliography export
    - app.py: Flask HTTP adapter
"""

__version__ = "1.0.0"

# =============================================================================
# PUBLIC API
# =============================================================================

# Models
from .models import (
    Author,
    BibliographicRecord,
    CitationStyle,
    DetectionResult,
    LanguageTag,
    ParseResult,
    SourceType,
    normalize_style_name,
)

# Errors
from .errors import (
    FishchiError,
    InvalidInputError,
    RenderError,
    DoiLookupError,
)

# Parsing
from .names import segment, reverse_persian_name
from .detectors import detect, detect_style, detect_language
from .extractors import extract
from .parser import CitationParser, parse_citation, parse_many

# Rendering
from .formatters import (
    FormatterBackend,
    format_citation,
    get_formatter,
    get_available_styles,
    is_style_supported,
)
from .localizer import localize
from .renderer import (
    VancouverOrder,
    CitationRenderer,
    BibliographyRenderer,
    render_in_text,
    render_bibliography,
)
from .service import format_citations, convert_citation_style, resolve_language

# Import / export
from .engines import extract_doi, fetch_crossref_by_doi
from .exporters import export_bibliography_docx

__all__ = [
    # Version
    '__version__',

    # Models
    'Author',
    'BibliographicRecord',
    'CitationStyle',
    'DetectionResult',
    'LanguageTag',
    'ParseResult',
    'SourceType',
    'normalize_style_name',

    # Errors
    'FishchiError',
    'InvalidInputError',
    'RenderError',
    'DoiLookupError',

    # Parsing
    'segment',
    'reverse_persian_name',
    'detect',
    'detect_style',
    'detect_language',
    'extract',
    'CitationParser',
    'parse_citation',
    'parse_many',

    # Rendering
    'FormatterBackend',
    'format_citation',
    'get_formatter',
    'get_available_styles',
    'is_style_supported',
    'localize',
    'VancouverOrder',
    'CitationRenderer',
    'BibliographyRenderer',
    'render_in_text',
    'render_bibliography',
    'format_citations',
    'convert_citation_style',
    'resolve_language',

    # Import / export
    'extract_doi',
    'fetch_crossref_by_doi',
    'export_bibliography_docx',
]
