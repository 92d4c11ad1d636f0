"""Arabic-to-Latin transliteration and name normalization."""

import re
import unicodedata
from types import MappingProxyType

# Arabic letter / diacritic → Latin approximation
_ARABIC_TO_LATIN = MappingProxyType({
    "ا": "a",
    "أ": "a",
    "إ": "e",
    "آ": "a",
    "ب": "b",
    "ت": "t",
    "ث": "th",
    "ج": "g",
    "ح": "h",
    "خ": "kh",
    "د": "d",
    "ذ": "z",
    "ر": "r",
    "ز": "z",
    "س": "s",
    "ش": "sh",
    "ص": "s",
    "ض": "d",
    "ط": "t",
    "ظ": "z",
    "ع": "a",
    "غ": "gh",
    "ف": "f",
    "ق": "k",
    "ك": "k",
    "ل": "l",
    "م": "m",
    "ن": "n",
    "ه": "h",
    "و": "w",
    "ي": "y",
    "ى": "a",
    "ء": "",
    "ؤ": "o",
    "ئ": "e",
    "ة": "a",
    "\ufefb": "la",  # lam-alef ligature
    "لا": "la",  # never hit by per-character lookup
    "\u0653": "",  # maddah
    "\u0652": "",  # sukun
    "\u0651": "",  # shadda
    "\u064e": "a",  # fatha
    "\u064f": "u",  # damma
    "\u0650": "e",  # kasra
    "\u064b": "an",  # fathatan
    "\u064c": "un",  # dammatan
    "\u064d": "en",  # kasratan
})

_ARABIC_RE = re.compile(r"[\u0600-\u06FF]")
_COMBINING_RE = re.compile(r"[\u0300-\u036f]")
_DISALLOWED_RE = re.compile(r"[^a-z0-9\s'-]")
_WHITESPACE_RE = re.compile(r"\s+")


def contains_arabic(text: str) -> bool:
    """True if any character falls in the Arabic block."""
    return _ARABIC_RE.search(text) is not None


def transliterate(text: str) -> str:
    """Replace each Arabic character with its Latin approximation.

    Characters outside the table (spaces, Latin letters, digits, punctuation)
    are kept as they are.
    """
    return "".join(_ARABIC_TO_LATIN.get(ch, ch) for ch in text)


def normalize(text: str) -> str:
    """Normalize a name for fuzzy comparison.

    Steps: lowercase → decompose → drop combining marks → replace anything
    but a-z, 0-9, whitespace, ' and - with a space → collapse spaces.
    """
    text = text.lower()
    text = unicodedata.normalize("NFKD", text)
    text = _COMBINING_RE.sub("", text)
    text = _DISALLOWED_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text
