"""
fishchi/names.py

Personal-name segmentation for Persian and English author strings.

Persian names are written "Family Given" (or "Family، Given"); when no comma
marks the boundary every split point of the token list is scored and the
best one wins. English names are handled with comma conventions and simple
capitalization rules.

segment() never raises: unparseable input yields an empty list.
"""

import re
from typing import List, Optional, Tuple

from .models import Author, LanguageTag
from .config import (
    PERSIAN_NAME_PREFIXES,
    PERSIAN_FAMILY_SUFFIXES,
    PERSIAN_LETTER_CLASS,
    NAME_STOPWORDS,
    NAME_PARTICLES,
    ENGLISH_AUTHOR_STOPWORDS,
)
from .logging_utils import get_logger

logger = get_logger(__name__.split('.')[-1])

_PERSIAN_LETTER_RE = re.compile(f'[{PERSIAN_LETTER_CLASS}]')
_PERSIAN_ET_AL_RE = re.compile(r'و\s*همکاران|\bet\.?\s+al\b\.?', re.IGNORECASE)
_PERSIAN_AUTHOR_SEP_RE = re.compile(r'[;؛&]|(?:^|\s)و(?=\s|$)')
_COMMA_RE = re.compile(r'[،,]')

_EN_ET_AL_RE = re.compile(r'\bet\.?\s+al\b\.?', re.IGNORECASE)
_EN_AUTHOR_SEP_RE = re.compile(r'\s*(?:;|&|\band\b)\s*', re.IGNORECASE)
_BARE_INITIALS_RE = re.compile(r'^[A-Z]{1,3}$')
_DOTTED_INITIALS_RE = re.compile(r'^(?:[A-Z]\.[\s-]?)+$')

_WHITESPACE_RE = re.compile(r'\s+')


# =============================================================================
# PERSIAN SPLIT SCORING
# =============================================================================

def is_name_prefix(word: str) -> bool:
    """Check if a token is a known given-name prefix (سید, میرزا, ...)."""
    return word.strip() in PERSIAN_NAME_PREFIXES


def is_family_suffix(word: str) -> bool:
    """
    Check if a token is, or ends with, a family-name suffix morpheme.

    Single- and two-letter suffixes only count as whole tokens, otherwise
    nearly every name would end with one.
    """
    word = word.strip()
    if word in PERSIAN_FAMILY_SUFFIXES:
        return True
    for suffix in PERSIAN_FAMILY_SUFFIXES:
        if len(suffix) >= 3 and len(word) > len(suffix) + 1 and word.endswith(suffix):
            return True
    return False


def given_name_score(word: str, position: int, total: int) -> float:
    """Score (0-1) that a token belongs to the given name."""
    score = 0.0
    if position == 0:
        score += 0.3
    if position == total - 1:
        score += 0.2
    if is_name_prefix(word):
        score += 0.4
    if is_family_suffix(word):
        score -= 0.3
    if len(word) <= 4:
        score += 0.1
    if len(word) >= 8:
        score -= 0.1
    return max(0.0, min(1.0, score))


def family_name_score(word: str, position: int, total: int) -> float:
    """Score (0-1) that a token belongs to the family name."""
    score = 0.0
    if position == 0:
        score += 0.4
    if position == total - 1:
        score -= 0.2
    if is_family_suffix(word):
        score += 0.4
    if is_name_prefix(word):
        score -= 0.3
    if len(word) >= 6:
        score += 0.1
    if len(word) <= 3:
        score -= 0.1
    return max(0.0, min(1.0, score))


def find_split_point(tokens: List[str]) -> int:
    """
    Index where the family name ends and the given name begins.

    Tokens are in "Family Given" order. Two tokens always split in the
    middle; longer names try every split and keep the best score (the
    earliest split wins ties).
    """
    total = len(tokens)
    if total <= 2:
        return 1

    best_split = 1
    best_score = float('-inf')

    for split in range(1, total):
        score = 0.0

        for i in range(split):
            score += family_name_score(tokens[i], i, split) * (split - i) / split

        given_total = total - split
        for i in range(split, total):
            score += given_name_score(tokens[i], i - split, given_total) * (total - i) / given_total

        balance = 1 - abs(split - given_total) / total
        score += balance * 0.2

        if score > best_score:
            best_score = score
            best_split = split

    return best_split


def split_persian_tokens(tokens: List[str]) -> Optional[Tuple[str, str]]:
    """Split "Family Given" tokens into (firstname, lastname)."""
    if len(tokens) < 2:
        return None
    split = find_split_point(tokens)
    return " ".join(tokens[split:]), " ".join(tokens[:split])


def reverse_persian_name(name: str) -> str:
    """
    Reverse a Persian name from "Family Given" to "Given Family".

    Single-word names are returned unchanged.
    """
    if not name or not isinstance(name, str):
        return name
    tokens = _WHITESPACE_RE.sub(' ', name.strip()).split(' ')
    parts = split_persian_tokens(tokens)
    if not parts:
        return name
    firstname, lastname = parts
    return f"{firstname} {lastname}"


# =============================================================================
# PERSIAN SEGMENTATION
# =============================================================================

def _starts_with_persian_letter(text: str) -> bool:
    text = text.strip()
    return bool(text) and bool(_PERSIAN_LETTER_RE.match(text))


def _segment_persian(text: str) -> List[Tuple[str, str]]:
    text = _PERSIAN_ET_AL_RE.sub('؛', text)
    candidates = []

    for chunk in _PERSIAN_AUTHOR_SEP_RE.split(text):
        parts = [p.strip(' .:') for p in _COMMA_RE.split(chunk)]
        parts = [p for p in parts if p]

        i = 0
        while i < len(parts):
            part = parts[i]
            following = parts[i + 1] if i + 1 < len(parts) else None

            # "Family، Given": the comma is name-internal when a Persian name token follows it
            if following and _starts_with_persian_letter(part) and _starts_with_persian_letter(following):
                candidates.append((following, part))
                i += 2
                continue

            names = split_persian_tokens(part.split())
            if names:
                candidates.append(names)
            i += 1

    return candidates


# =============================================================================
# ENGLISH SEGMENTATION
# =============================================================================

def _is_initials(token: str) -> bool:
    return bool(_BARE_INITIALS_RE.match(token) or _DOTTED_INITIALS_RE.match(token))


def _normalize_initials(given: str) -> str:
    """J -> J., JK -> J.K.; anything else is returned unchanged."""
    tokens = []
    for token in given.split():
        if _BARE_INITIALS_RE.match(token):
            token = ''.join(f"{letter}." for letter in token)
        tokens.append(token)
    return " ".join(tokens)


def _looks_like_given(part: str) -> bool:
    tokens = part.split()
    if not tokens or not tokens[0][:1].isupper():
        return False
    if all(_is_initials(t) for t in tokens):
        return True
    return len(tokens) == 1 and tokens[0].isalpha()


def _split_bare_english(tokens: List[str]) -> Optional[Tuple[str, str]]:
    """Split an uncommaed English name into (firstname, lastname)."""
    if len(tokens) < 2:
        return None

    # Two tokens are always "Family Given", which also covers Vancouver "Smith J"
    if len(tokens) == 2:
        return tokens[1], tokens[0]

    # "van der Berg JK"
    if _is_initials(tokens[-1]):
        trailing = len(tokens) - 1
        while trailing > 1 and _is_initials(tokens[trailing - 1]):
            trailing -= 1
        return " ".join(tokens[trailing:]), " ".join(tokens[:trailing])

    # "J. Smith", "J. K. Rowling"
    if _is_initials(tokens[0]):
        leading = 1
        while leading < len(tokens) - 1 and _is_initials(tokens[leading]):
            leading += 1
        return " ".join(tokens[:leading]), " ".join(tokens[leading:])

    return " ".join(tokens[:-1]), tokens[-1]


def _segment_english(text: str) -> List[Tuple[str, str]]:
    text = _EN_ET_AL_RE.sub(';', text)
    candidates = []

    for chunk in _EN_AUTHOR_SEP_RE.split(text):
        parts = [p.strip(' :') for p in chunk.split(',')]
        parts = [p for p in parts if p and p.lower().strip('.') not in ENGLISH_AUTHOR_STOPWORDS]

        i = 0
        while i < len(parts):
            part = parts[i].rstrip('.') if not _is_initials(parts[i]) else parts[i]
            tokens = part.split()
            following = parts[i + 1] if i + 1 < len(parts) else None

            if following and tokens and _looks_like_given(following):
                following_tokens = following.split()
                if all(_is_initials(t) for t in following_tokens) or len(tokens) == 1:
                    candidates.append((following, part))
                    i += 2
                    continue

            names = _split_bare_english(tokens)
            if names:
                candidates.append(names)
            i += 1

    result = []
    for firstname, lastname in candidates:
        firstname = _normalize_initials(firstname)
        if not firstname[:1].isupper():
            continue
        if not any(t[:1].isupper() for t in lastname.split()):
            continue
        if lastname.split()[0].lower() not in NAME_PARTICLES and not lastname[:1].isupper():
            continue
        result.append((firstname, lastname))
    return result


# =============================================================================
# PUBLIC API
# =============================================================================

def _is_valid_part(part: str) -> bool:
    clean = part.strip()
    if len(clean) < 2:
        return False
    if clean.replace('.', '').replace(' ', '').isdigit():
        return False
    return clean.lower().strip('.') not in NAME_STOPWORDS


def segment(raw: str, language: LanguageTag = LanguageTag.ENGLISH) -> List[Author]:
    """
    Split a raw author string into ordered Author values.

    Args:
        raw: Author segment of a citation, e.g. "Smith, J., & Johnson, M."
            or "ربیعی، لیلا، یوسفی خواه، سارا"
        language: Which naming convention to apply

    Returns:
        Authors in input order, filtered and de-duplicated. Empty list when
        nothing usable is found.
    """
    if not raw or not isinstance(raw, str):
        return []

    text = _WHITESPACE_RE.sub(' ', raw).strip()
    try:
        if LanguageTag.from_string(language) is LanguageTag.PERSIAN:
            candidates = _segment_persian(text)
        else:
            candidates = _segment_english(text)
    except (ValueError, IndexError) as e:
        logger.debug("[Names] Could not segment %r: %s", raw[:60], e)
        return []

    authors = []
    seen = set()
    for firstname, lastname in candidates:
        firstname = firstname.strip(' ,;:')
        lastname = lastname.strip(' ,;:')
        if not (_is_valid_part(firstname) and _is_valid_part(lastname)):
            continue
        key = (firstname, lastname)
        if key in seen:
            continue
        seen.add(key)
        authors.append(Author(firstname=firstname, lastname=lastname))

    return authors
