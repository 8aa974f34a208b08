"""
fishchi/detectors.py

Pattern detection for citation style and language.
Fast, regex-based, no external calls.

Each signature is a (style, pattern, weight) triple. A style's score is the
sum of the weights of its signatures that match; the strictly highest score
wins and ties go to the earlier style in TIE_PRIORITY.
"""

import re
from typing import Dict, List, Tuple, Pattern

from .models import CitationStyle, LanguageTag, DetectionResult
from .config import PERSIAN_CHAR_CLASS


# =============================================================================
# SIGNATURES
# =============================================================================

_QUOTED_TITLE = r'["“«][^"”»]{3,}["”»]'

STYLE_SIGNATURES: List[Tuple[CitationStyle, Pattern, int]] = [
    # APA: "(YYYY)." right after the author segment
    (CitationStyle.APA, re.compile(r'[.\w]\s*\(\d{4}[a-z]?\)\s*\.'), 3),
    (CitationStyle.APA, re.compile(r'\(\d{4}[a-z]?\)'), 1),
    (CitationStyle.APA, re.compile(r'\bdoi\.org/|\bdoi:', re.IGNORECASE), 1),

    # Vancouver: leading "[n]" / "n.", volume(issue):pages, YYYY;volume
    (CitationStyle.VANCOUVER, re.compile(r'^\s*(?:\[\d+\]|\d+\.\s)'), 3),
    (CitationStyle.VANCOUVER, re.compile(r'\d+\s*\(\s*\d{1,3}\s*\)\s*:\s*\d+'), 3),
    (CitationStyle.VANCOUVER, re.compile(r'\d{4}\s*[;؛]\s*\d+'), 2),

    # Chicago: quoted title closed after its period, "vol, no. n (YYYY)"
    (CitationStyle.CHICAGO, re.compile(r'["“][^"”]{3,}\.["”]'), 2),
    (CitationStyle.CHICAGO, re.compile(r'\d+,\s*no\.\s*\d+\s*\(\d{4}\)', re.IGNORECASE), 3),
    (CitationStyle.CHICAGO, re.compile(r'\(\d{4}\):\s*\d+'), 2),

    # MLA: quoted title, "vol. n, no. n", "n, YYYY, pp."
    (CitationStyle.MLA, re.compile(_QUOTED_TITLE), 2),
    (CitationStyle.MLA, re.compile(r'\bvol\.\s*\d+,\s*no\.', re.IGNORECASE), 2),
    (CitationStyle.MLA, re.compile(r'\d+,\s*\d{4},\s*pp?\.', re.IGNORECASE), 2),

    # Harvard: unparenthesized "Author YYYY," / "Author, YYYY,"
    (CitationStyle.HARVARD, re.compile(r'[^\W\d_]\.?,?\s+\d{4}[a-z]?,'), 3),
    (CitationStyle.HARVARD, re.compile(r'\b(?:retrieved from|available at)\b', re.IGNORECASE), 1),
]

TIE_PRIORITY: List[CitationStyle] = [
    CitationStyle.APA,
    CitationStyle.HARVARD,
    CitationStyle.VANCOUVER,
    CitationStyle.CHICAGO,
    CitationStyle.MLA,
]

_PERSIAN_RE = re.compile(f'[{PERSIAN_CHAR_CLASS}]')


# =============================================================================
# DETECTORS
# =============================================================================

def score_styles(text: str) -> Dict[CitationStyle, int]:
    """
    Accumulate signature weights per style.

    Every style in TIE_PRIORITY is present in the result, with 0 when
    nothing matched.
    """
    scores = {style: 0 for style in TIE_PRIORITY}
    if not text:
        return scores
    for style, pattern, weight in STYLE_SIGNATURES:
        if pattern.search(text):
            scores[style] += weight
    return scores


def detect_style(text: str) -> CitationStyle:
    """Pick the highest-scoring style, UNKNOWN when nothing matched."""
    scores = score_styles(text)
    best = max(scores.values())
    if best == 0:
        return CitationStyle.UNKNOWN
    for style in TIE_PRIORITY:
        if scores[style] == best:
            return style
    return CitationStyle.UNKNOWN


def is_persian(text: str) -> bool:
    """Check if text contains any character from the Persian ranges."""
    return bool(text) and bool(_PERSIAN_RE.search(text))


def detect_language(text: str) -> LanguageTag:
    return LanguageTag.PERSIAN if is_persian(text) else LanguageTag.ENGLISH


def detect(text: str) -> DetectionResult:
    """
    Run style and language detection on one citation.

    The two are independent: a Persian citation can be in any style.
    """
    scores = score_styles(text)
    return DetectionResult(
        style=detect_style(text),
        language=detect_language(text),
        scores=scores,
    )
