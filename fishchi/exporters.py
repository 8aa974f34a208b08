"""
fishchi/exporters.py

Word (.docx) export of a rendered bibliography using python-docx.

The bibliography HTML from BibliographyRenderer is walked entry by entry;
each entry becomes one paragraph, with <i> runs kept as italics and
right-to-left paragraph properties for Persian entries.
"""

import io
import re
from html import unescape
from typing import List, Sequence

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from .models import BibliographicRecord, CitationStyle
from .config import DOCX_HEADING, LANGUAGE_AUTO
from .renderer import BibliographyRenderer, OrderLike
from .logging_utils import get_logger

logger = get_logger(__name__.split('.')[-1])

_BLOCK_RE = re.compile(
    r'<h3>(?P<heading>.*?)</h3>'
    r'|<div class="bib-section"[^>]*dir="(?P<section_dir>rtl|ltr)"[^>]*>'
    r'|<div class="csl-entry"(?:[^>]*dir="(?P<entry_dir>rtl|ltr)")?[^>]*>(?P<entry>.*?)</div>',
    re.DOTALL,
)
_TAG_RE = re.compile(r'<[^>]+>')


def _parse_formatted_text(html_text: str) -> List[dict]:
    """
    Split entry markup into runs with formatting info.

    Handles <i>/<em> for italics and <b>/<strong> for bold; any other tag
    is dropped.

    Returns list of dicts: [{'text': '...', 'italic': bool, 'bold': bool}, ...]
    """
    parts = []
    pattern = r'<(i|em|b|strong)>(.*?)</\1>|([^<]+)|<[^>]*>'

    for match in re.finditer(pattern, html_text, re.DOTALL | re.IGNORECASE):
        tag, tagged_text, plain_text = match.group(1), match.group(2), match.group(3)
        if plain_text:
            parts.append({'text': unescape(plain_text), 'italic': False, 'bold': False})
        elif tag and tagged_text:
            parts.append({
                'text': unescape(_TAG_RE.sub('', tagged_text)),
                'italic': tag.lower() in ('i', 'em'),
                'bold': tag.lower() in ('b', 'strong'),
            })

    if not parts:
        parts.append({'text': unescape(_TAG_RE.sub('', html_text)), 'italic': False, 'bold': False})
    return parts


def _set_rtl(paragraph) -> None:
    """Mark a paragraph and its runs as right-to-left."""
    p_pr = paragraph._p.get_or_add_pPr()
    p_pr.append(OxmlElement('w:bidi'))
    for run in paragraph.runs:
        r_pr = run._r.get_or_add_rPr()
        rtl = OxmlElement('w:rtl')
        rtl.set(qn('w:val'), '1')
        r_pr.append(rtl)
    paragraph.alignment = WD_ALIGN_PARAGRAPH.RIGHT


def bibliography_blocks(html: str) -> List[dict]:
    """
    Headings and entries of a rendered bibliography, in document order.

    Each block is {'kind': 'heading'|'entry', 'markup': str, 'rtl': bool}.
    """
    blocks = []
    section_rtl = False
    for m in _BLOCK_RE.finditer(html or ''):
        if m.group('section_dir'):
            section_rtl = m.group('section_dir') == 'rtl'
        elif m.group('heading') is not None:
            blocks.append({'kind': 'heading', 'markup': m.group('heading'), 'rtl': section_rtl})
        elif m.group('entry') is not None:
            entry_dir = m.group('entry_dir')
            rtl = entry_dir == 'rtl' if entry_dir else section_rtl
            blocks.append({'kind': 'entry', 'markup': m.group('entry').strip(), 'rtl': rtl})
    return blocks


def export_bibliography_docx(records: Sequence[BibliographicRecord], style=CitationStyle.APA,
                             language=LANGUAGE_AUTO, order: OrderLike = None,
                             backend=None) -> bytes:
    """
    Render a bibliography and write it to a .docx document.

    Args:
        records: Records to list
        style: Citation style (enum or alias)
        language: Language hint for section order ('fa-IR', 'en-US', 'auto')
        order: Vancouver citation order (VancouverOrder or id list)

    Returns:
        The .docx file contents
    """
    html = BibliographyRenderer(backend).render_bibliography(records, style, language, order)

    doc = Document()
    heading = doc.add_heading(DOCX_HEADING, level=1)
    _set_rtl(heading)

    blocks = bibliography_blocks(html)
    for block in blocks:
        if block['kind'] == 'heading':
            paragraph = doc.add_heading(unescape(block['markup']), level=2)
        else:
            paragraph = doc.add_paragraph()
            for part in _parse_formatted_text(block['markup']):
                run = paragraph.add_run(part['text'])
                run.italic = part['italic'] or None
                run.bold = part['bold'] or None
                run.font.size = Pt(12)
            paragraph.paragraph_format.space_after = Pt(6)

        if block['rtl']:
            _set_rtl(paragraph)
        else:
            paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT

    buffer = io.BytesIO()
    doc.save(buffer)
    logger.info("[Export] Bibliography with %d entries written to docx",
                sum(1 for b in blocks if b['kind'] == 'entry'))
    return buffer.getvalue()
