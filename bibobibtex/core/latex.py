"""Translation between BibTeX LaTeX escapes and Unicode text.

Accented letters are handled generically: each accent command maps to a
Unicode combining mark and the pair is composed with NFC, so ``{\\'e}``,
``\\'{e}`` and ``\\'e`` all become ``é``. Letters that are not accented
base letters (``\\ss``, ``\\o``, ``\\ae`` ...) use a fixed table.
"""

import re
import unicodedata

ACCENTS = {
    "`": "\u0300",
    "'": "\u0301",
    "^": "\u0302",
    "~": "\u0303",
    "=": "\u0304",
    "u": "\u0306",
    ".": "\u0307",
    '"': "\u0308",
    "r": "\u030a",
    "H": "\u030b",
    "v": "\u030c",
    "d": "\u0323",
    "c": "\u0327",
    "k": "\u0328",
}

COMBINING_TO_ACCENT = {mark: command for command, mark in ACCENTS.items()}

SPECIAL_LETTERS = {
    "ss": "ß",
    "ae": "æ",
    "AE": "Æ",
    "oe": "œ",
    "OE": "Œ",
    "aa": "å",
    "AA": "Å",
    "o": "ø",
    "O": "Ø",
    "l": "ł",
    "L": "Ł",
    "i": "ı",
    "j": "ȷ",
}

LETTER_TO_SPECIAL = {
    letter: command for command, letter in SPECIAL_LETTERS.items()
    if command not in ("aa", "AA", "i", "j")
}

_SYMBOL_ACCENTS = "".join(re.escape(c) for c in ACCENTS if not c.isalpha())
_LETTER_ACCENTS = "".join(c for c in ACCENTS if c.isalpha())
_ANY_ACCENT = f"[{_SYMBOL_ACCENTS}{_LETTER_ACCENTS}]"
_BASE = r"(\\i|\\j|[A-Za-z])"

_BRACED_ACCENT = re.compile(rf"\{{\\({_ANY_ACCENT})\s*\{{?{_BASE}\}}?\}}")
_ACCENT_ARG = re.compile(rf"\\({_ANY_ACCENT})\s*\{{{_BASE}\}}")
_SYMBOL_ACCENT = re.compile(rf"\\([{_SYMBOL_ACCENTS}]){_BASE}")
_LETTER_ACCENT = re.compile(rf"\\([{_LETTER_ACCENTS}])\s+{_BASE}")

_SPECIAL_NAMES = "|".join(sorted(SPECIAL_LETTERS, key=len, reverse=True))
_BRACED_SPECIAL = re.compile(rf"\{{\\({_SPECIAL_NAMES})\}}")
_BARE_SPECIAL = re.compile(rf"\\({_SPECIAL_NAMES})(?:\{{\}}|(?![A-Za-z]))")


def _compose(command: str, base: str) -> str:
    if base in ("\\i", "\\j"):
        base = base[1]
    composed = unicodedata.normalize("NFC", base + ACCENTS[command])
    return composed


def _replace_accent(match: re.Match) -> str:
    return _compose(match.group(1), match.group(2))


def to_unicode(text: str) -> str:
    """Replace LaTeX accent and letter escapes with Unicode characters."""
    if not text or "\\" not in text:
        return text

    result = _BRACED_ACCENT.sub(_replace_accent, text)
    result = _ACCENT_ARG.sub(_replace_accent, result)
    result = _SYMBOL_ACCENT.sub(_replace_accent, result)
    result = _LETTER_ACCENT.sub(_replace_accent, result)
    result = _BRACED_SPECIAL.sub(lambda m: SPECIAL_LETTERS[m.group(1)], result)
    return _BARE_SPECIAL.sub(lambda m: SPECIAL_LETTERS[m.group(1)], result)


def _latex_char(char: str) -> str:
    if char in LETTER_TO_SPECIAL:
        return f"{{\\{LETTER_TO_SPECIAL[char]}}}"

    decomposed = unicodedata.normalize("NFD", char)
    if len(decomposed) == 2 and decomposed[1] in COMBINING_TO_ACCENT:
        command = COMBINING_TO_ACCENT[decomposed[1]]
        base = decomposed[0]
        if command.isalpha():
            return f"{{\\{command}{{{base}}}}}"
        return f"{{\\{command}{base}}}"
    return char


def to_latex(text: str) -> str:
    """Replace non-ASCII letters with LaTeX escapes.

    ASCII text is left alone, so math mode, escaped reserved characters
    and other markup pass through unchanged.
    """
    if not text:
        return text
    return "".join(_latex_char(c) if ord(c) > 127 else c for c in text)
