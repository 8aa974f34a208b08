"""
fishchi/config.py

Configuration, constants, and shared lookup tables.
"""

import os
from typing import Dict, List, Tuple

# =============================================================================
# ENVIRONMENT SETTINGS
# =============================================================================

LOG_LEVEL = os.environ.get('FISHCHI_LOG_LEVEL', 'INFO').upper()
PERSIAN_NUMERALS = os.environ.get('FISHCHI_PERSIAN_NUMERALS', '').lower() in ('1', 'true', 'yes')
CROSSREF_MAILTO = os.environ.get('CROSSREF_MAILTO', 'user@example.com')

# =============================================================================
# HTTP SETTINGS (DOI import only)
# =============================================================================

DEFAULT_TIMEOUT = 10  # seconds
DEFAULT_HEADERS = {
    'User-Agent': f'Fishchi/1.0 (mailto:{CROSSREF_MAILTO})',
    'Accept': 'application/json'
}
CROSSREF_WORKS_URL = 'https://api.crossref.org/works/'

# =============================================================================
# STYLE NAMES
# =============================================================================

DEFAULT_TEMPLATE = 'apa'

# Case-insensitive alias -> template name
STYLE_ALIASES: Dict[str, str] = {
    'apa': 'apa',
    'apa 7': 'apa',
    'apa7': 'apa',
    'mla': 'mla',
    'mla 9': 'mla',
    'mla9': 'mla',
    'chicago': 'chicago-note-bibliography',
    'chicago manual of style': 'chicago-note-bibliography',
    'chicago-note-bibliography': 'chicago-note-bibliography',
    'cms': 'chicago-note-bibliography',
    'harvard': 'harvard-cite-them-right',
    'harvard1': 'harvard-cite-them-right',
    'harvard-cite-them-right': 'harvard-cite-them-right',
    'vancouver': 'vancouver',
    'nlm': 'vancouver',
}

AVAILABLE_TEMPLATES: List[str] = [
    'apa',
    'mla',
    'chicago-note-bibliography',
    'harvard-cite-them-right',
    'vancouver',
]

# =============================================================================
# LANGUAGE & LOCALES
# =============================================================================

LOCALE_PERSIAN = 'fa-IR'
LOCALE_ENGLISH = 'en-US'
LANGUAGE_AUTO = 'auto'

# Any character in these ranges marks text as Persian
PERSIAN_CHAR_CLASS = '\u0600-\u06FF\u0750-\u077F\uFB50-\uFDFF\uFE70-\uFEFF'
# Letters only (alef-madda .. farsi yeh), used for name tokens
PERSIAN_LETTER_CLASS = '\u0622-\u063A\u0641-\u064A\u067E\u0686\u0698\u06A9\u06AF\u06C0\u06CC'

PERSIAN_DIGITS = '۰۱۲۳۴۵۶۷۸۹'
ARABIC_INDIC_DIGITS = '٠١٢٣٤٥٦٧٨٩'

SECTION_HEADINGS: Dict[str, str] = {
    LOCALE_PERSIAN: 'Persian sources',
    LOCALE_ENGLISH: 'English sources',
}

DOCX_HEADING = 'فهرست منابع'

# =============================================================================
# YEAR & FIELD LIMITS
# =============================================================================

GREGORIAN_YEAR_RANGE: Tuple[int, int] = (1000, 2100)
PERSIAN_YEAR_RANGE: Tuple[int, int] = (1300, 1500)

MAX_VENUE_LENGTH = 200
MIN_TITLE_LENGTH = 10

# =============================================================================
# CONFIDENCE WEIGHTS
# =============================================================================

CONFIDENCE_WEIGHTS: Dict[str, int] = {
    'authors': 30,
    'title': 25,
    'year': 20,
    'venue': 15,
    'volume_or_pages': 10,
}

# =============================================================================
# PERSIAN NAME PARTS
# =============================================================================

# Religious / honorific / descriptive prefixes, pull a token toward the given name
PERSIAN_NAME_PREFIXES = frozenset([
    'سید', 'سیده', 'میر', 'میرزا', 'حاج', 'حاجیه', 'حاجی', 'آیت‌الله',
    'حجةالاسلام', 'آقا', 'شیخ', 'مولوی', 'علامه', 'امام', 'استاد', 'پیر',
    'ماموستا', 'غلام', 'سیّد', 'ملا', 'دکتر', 'پزشک',
    'بی', 'نا', 'بد', 'با', 'هم', 'پر', 'فر', 'خوش',
    'عدل', 'نور', 'داد', 'توکل', 'حق', 'شهر', 'مهر', 'آب', 'گل', 'چهار', 'سبز',
])

# Family-name suffix morphemes (kinship, occupational, geographic)
PERSIAN_FAMILY_SUFFIXES = frozenset([
    'زاده', 'زاد', 'پور', 'نژاد', 'بن', 'نو', 'فرزند',
    'فر', 'کیا', 'اصل', 'مه', 'جاوید',
    'دوست', 'طلب', 'خواه', 'پرور', 'پرست', 'دار',
    'گر', 'کار', 'چی', 'ساز', 'بان',
    'آبادی', 'وند', 'لو', 'لی', 'یان', 'دهقان', 'دهقانی',
    'کوهی', 'کوهستانی', 'خراسانی', 'اصفهانی', 'شیرازی', 'تهرانی', 'تبریزی',
    'یزدی', 'کرمانی', 'مازندرانی', 'اردبیلی', 'سنندجی', 'مشهدی', 'نجفی',
    'عراقی', 'کاشانی', 'عرب', 'ترک', 'کرد', 'بلوچ', 'لر',
    'ی', 'انی', 'آسا', 'آگه', 'آگین', 'مند', 'ناک',
    'ور', 'آور', 'فام', 'کده', 'خان', 'کدخدا', 'خواجه', 'امیر', 'سردار', 'سرهنگ',
])

# =============================================================================
# NAME STOPWORDS
# =============================================================================

ENGLISH_AUTHOR_STOPWORDS = frozenset(['and', 'et al', 'et', 'al'])

NAME_STOPWORDS = frozenset([
    # Persian function words
    'و', 'در', 'به', 'از', 'که', 'این', 'آن', 'با', 'برای', 'یک', 'را', 'همکاران',
    # English function words
    'and', 'et', 'al', 'the', 'of', 'in', 'on', 'for', 'a', 'an', 'to', 'with',
    # Section labels and bibliographic boilerplate
    'references', 'reference', 'bibliography', 'works cited', 'sources',
    'available', 'from', 'internet', 'retrieved', 'online', 'journal',
    'vol', 'no', 'pp', 'doi', 'isbn', 'url',
    'منابع', 'مراجع', 'کتابنامه', 'فهرست', 'چکیده',
])

# Lowercase particles allowed at the start of an English family name
NAME_PARTICLES = frozenset(['van', 'von', 'der', 'den', 'de', 'da', 'del', 'di', 'du', 'la', 'le', 'bin', 'al'])

# =============================================================================
# EXTRACTION HINTS
# =============================================================================

PUBLISHER_HINTS = [
    'press', 'publishing', 'publishers', 'publisher', 'books', 'verlag',
    'انتشارات', 'نشر', 'چاپ',
]

THESIS_HINTS = ['thesis', 'dissertation', 'پایان‌نامه', 'پایان نامه', 'رساله']

# =============================================================================
# PERSIAN LOCALIZATION
# =============================================================================

# (pattern, replacement) applied in order, case-insensitively; patterns are
# anchored on word boundaries
PERSIAN_LOCALIZATIONS: List[Tuple[str, str]] = [
    (r'et al\.', 'و همکاران'),
    (r'et al', 'و همکاران'),
    (r'n\.d\.', 'بی‌تا'),
    (r'eds\.', 'ویراستاران'),
    (r'ed\.', 'ویراستار'),
    (r'pp\.', 'صص.'),
    # capital "P." is an initial
    (r'(?-i:p)\.', 'ص.'),
    (r'vol\.', 'جلد'),
    (r'no\.', 'شماره'),
    (r'In', 'در'),
    (r'Retrieved from', 'بازیابی از'),
    (r'Available from', 'دسترس در'),
    (r'Available at', 'دسترس در'),
    (r'and', 'و'),
    (r'January', 'ژانویه'),
    (r'February', 'فوریه'),
    (r'March', 'مارس'),
    (r'April', 'آوریل'),
    (r'May', 'می'),
    (r'June', 'ژوئن'),
    (r'July', 'ژوئیه'),
    (r'August', 'اوت'),
    (r'September', 'سپتامبر'),
    (r'October', 'اکتبر'),
    (r'November', 'نوامبر'),
    (r'December', 'دسامبر'),
]
