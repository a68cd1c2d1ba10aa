# src/gedcom_codec/loader/encoding.py

"""
Character set handling for GEDCOM input.

GEDCOM 5.5.1 files declare their character set in ``HEAD.CHAR``. Most
are UTF-8, but older exports use ANSEL (ANSI Z39.47), an 8-bit set whose
combining diacritics come *before* the letter they modify. Everything
here turns raw file bytes into ordinary ``str`` for the tokenizer:

    detect_encoding(data)     -> "UTF-8" | "UTF-16" | "ANSEL" | "ASCII" | ...
    ansel_to_utf8(data)       -> str   (NFC-composed)
    utf8_to_ansel(text)       -> bytes
    normalize_encoding(data)  -> str   (CHAR line rewritten to UTF-8)
"""

from __future__ import annotations

import codecs
import re
import unicodedata
from typing import Dict, List, Union

# -----------------------------------------------------------------------------
# ANSEL tables
# -----------------------------------------------------------------------------

# Spacing characters (0xA1-0xCF).
ANSEL_SPACING: Dict[int, str] = {
    0xA1: "Ł",  # L with stroke
    0xA2: "Ø",  # O with stroke
    0xA3: "Đ",  # D with stroke
    0xA4: "Þ",  # thorn
    0xA5: "Æ",  # AE
    0xA6: "Œ",  # OE
    0xA7: "ʹ",  # soft sign
    0xA8: "·",  # middle dot
    0xA9: "♭",  # flat
    0xAA: "®",  # registered
    0xAB: "±",  # plus-minus
    0xAC: "Ơ",  # O with horn
    0xAD: "Ư",  # U with horn
    0xAE: "ʼ",  # alif
    0xB0: "ʻ",  # ayn
    0xB1: "ł",  # l with stroke
    0xB2: "ø",  # o with stroke
    0xB3: "đ",  # d with stroke
    0xB4: "þ",  # thorn
    0xB5: "æ",  # ae
    0xB6: "œ",  # oe
    0xB7: "ʺ",  # hard sign
    0xB8: "ı",  # dotless i
    0xB9: "£",  # pound
    0xBA: "ð",  # eth
    0xBC: "ơ",  # o with horn
    0xBD: "ư",  # u with horn
    0xBE: "□",  # empty box (GEDCOM)
    0xBF: "■",  # black box (GEDCOM)
    0xC0: "°",  # degree
    0xC1: "ℓ",  # script l
    0xC2: "℗",  # sound recording copyright
    0xC3: "©",  # copyright
    0xC4: "♯",  # sharp
    0xC5: "¿",  # inverted question mark
    0xC6: "¡",  # inverted exclamation mark
    0xC7: "ß",  # sharp s
    0xC8: "€",  # euro
    0xCD: "e",  # midline e (GEDCOM)
    0xCE: "o",  # midline o (GEDCOM)
    0xCF: "ß",  # sharp s (GEDCOM)
}

# Non-spacing marks (0xE0-0xFE), written before their base letter.
ANSEL_COMBINING: Dict[int, str] = {
    0xE0: "\u0309",  # hook above
    0xE1: "\u0300",  # grave
    0xE2: "\u0301",  # acute
    0xE3: "\u0302",  # circumflex
    0xE4: "\u0303",  # tilde
    0xE5: "\u0304",  # macron
    0xE6: "\u0306",  # breve
    0xE7: "\u0307",  # dot above
    0xE8: "\u0308",  # diaeresis
    0xE9: "\u030C",  # caron
    0xEA: "\u030A",  # ring above
    0xEB: "\uFE20",  # ligature, left half
    0xEC: "\uFE21",  # ligature, right half
    0xED: "\u0315",  # comma above right
    0xEE: "\u030B",  # double acute
    0xEF: "\u0310",  # candrabindu
    0xF0: "\u0327",  # cedilla
    0xF1: "\u0328",  # ogonek
    0xF2: "\u0323",  # dot below
    0xF3: "\u0324",  # diaeresis below
    0xF4: "\u0325",  # ring below
    0xF5: "\u0333",  # double low line
    0xF6: "\u0332",  # low line
    0xF7: "\u0326",  # comma below
    0xF8: "\u031C",  # left half ring below
    0xF9: "\u032E",  # breve below
    0xFA: "\uFE22",  # double tilde, left half
    0xFB: "\uFE23",  # double tilde, right half
    0xFE: "\u0313",  # comma above
}

# Sharp s has two codes; the GEDCOM one (0xCF) is written.
_SPACING_REVERSE: Dict[str, int] = {
    char: code for code, char in ANSEL_SPACING.items() if not char.isascii()
}
_COMBINING_REVERSE: Dict[str, int] = {char: code for code, char in ANSEL_COMBINING.items()}

REPLACEMENT = "\uFFFD"


# -----------------------------------------------------------------------------
# Detection
# -----------------------------------------------------------------------------

_CHAR_LINE = re.compile(r"^[ \t]*1[ \t]+CHAR[ \t]+(.+?)[ \t\r]*$", re.MULTILINE)

# HEAD.CHAR names -> codec names understood by ``decode_text``
CHARSET_ALIASES: Dict[str, str] = {
    "UTF-8": "UTF-8",
    "UTF8": "UTF-8",
    "UNICODE": "UTF-16",
    "UTF-16": "UTF-16",
    "ANSEL": "ANSEL",
    "ASCII": "ASCII",
    "ANSI": "CP1252",
    "WINDOWS": "CP1252",
    "IBM WINDOWS": "CP1252",
    "IBMPC": "CP437",
    "IBM DOS": "CP437",
    "MACINTOSH": "MAC_ROMAN",
}


def charset_name(declared: str) -> str:
    """Normalize a HEAD.CHAR value ('ansel', 'UTF8', 'IBM WINDOWS', ...)."""
    key = " ".join(declared.strip().upper().split())
    if key in CHARSET_ALIASES:
        return CHARSET_ALIASES[key]
    if "ANSEL" in key:
        return "ANSEL"
    if key.startswith("UTF"):
        return "UTF-16" if "16" in key else "UTF-8"
    return key


def detect_encoding(data: Union[bytes, str]) -> str:
    """
    Guess the character set of a GEDCOM document.

    A byte order mark, or the NUL byte pattern of "0 HEAD" in UTF-16,
    decides first. Otherwise the ``1 CHAR`` line of the header is used.
    Documents without one are taken as UTF-8.
    """
    if isinstance(data, bytes):
        if data.startswith(codecs.BOM_UTF8):
            return "UTF-8"
        if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
            return "UTF-16"
        # "0 HEAD" in UTF-16 without a BOM
        if data[:2] == b"0\x00":
            return "UTF-16-LE"
        if data[:2] == b"\x000":
            return "UTF-16-BE"
        # ASCII-compatible sets share the header bytes; latin-1 never fails.
        text = data[:4096].decode("latin-1")
    else:
        text = data[:4096]

    match = _CHAR_LINE.search(text)
    if match is None:
        return "UTF-8"
    return charset_name(match.group(1))


# -----------------------------------------------------------------------------
# ANSEL <-> Unicode
# -----------------------------------------------------------------------------

def ansel_to_utf8(data: bytes) -> str:
    """
    Decode ANSEL bytes.

    Combining marks are held until their base character arrives and are
    then emitted after it, as Unicode expects, before NFC composition.
    Bytes with no ANSEL meaning become U+FFFD.
    """
    out: List[str] = []
    pending: List[str] = []

    for byte in data:
        if byte in ANSEL_COMBINING:
            pending.append(ANSEL_COMBINING[byte])
            continue

        if byte < 0x80:
            char = chr(byte)
        else:
            char = ANSEL_SPACING.get(byte, REPLACEMENT)

        out.append(char)
        if pending:
            out.extend(pending)
            pending.clear()

    # Marks with nothing left to modify are kept as-is.
    out.extend(pending)
    return unicodedata.normalize("NFC", "".join(out))


def utf8_to_ansel(text: str, errors: str = "replace") -> bytes:
    """
    Encode text as ANSEL.

    Text is decomposed (NFD) so accented letters become base + marks; the
    marks are then written ahead of their base. Characters ANSEL cannot
    express become ``?`` with ``errors="replace"`` or raise
    UnicodeEncodeError with ``errors="strict"``.
    """
    out = bytearray()
    marks = bytearray()
    base: bytes = b""

    def flush() -> None:
        nonlocal base
        out.extend(marks)
        out.extend(base)
        marks.clear()
        base = b""

    decomposed = unicodedata.normalize("NFD", text)
    for index, char in enumerate(decomposed):
        if char in _COMBINING_REVERSE and base:
            marks.append(_COMBINING_REVERSE[char])
            continue

        flush()
        if char.isascii():
            base = char.encode("ascii")
        elif char in _SPACING_REVERSE:
            base = bytes([_SPACING_REVERSE[char]])
        elif char in _COMBINING_REVERSE:
            # A mark with no base letter stands alone.
            out.append(_COMBINING_REVERSE[char])
        elif errors == "strict":
            raise UnicodeEncodeError("ansel", decomposed, index, index + 1, "not representable in ANSEL")
        else:
            base = b"?"

    flush()
    return bytes(out)


# -----------------------------------------------------------------------------
# Bytes -> text
# -----------------------------------------------------------------------------

def decode_text(data: bytes, encoding: str) -> str:
    """Decode with a detected encoding; undecodable bytes are replaced."""
    if encoding == "ANSEL":
        return ansel_to_utf8(data)
    if encoding == "UTF-8":
        return data.decode("utf-8-sig", errors="replace")
    try:
        codecs.lookup(encoding)
    except LookupError:
        # Unknown HEAD.CHAR names are read as UTF-8.
        return data.decode("utf-8", errors="replace")
    return data.decode(encoding, errors="replace")


def normalize_encoding(data: bytes) -> str:
    """
    Decode a GEDCOM file to text, whatever its declared character set.

    Once transcoded, the ``1 CHAR`` header line no longer describes the
    text, so non-UTF-8 inputs have it rewritten to ``1 CHAR UTF-8``.
    """
    encoding = detect_encoding(data)
    text = decode_text(data, encoding)
    if encoding in ("UTF-8", "ASCII"):
        return text
    return _CHAR_LINE.sub("1 CHAR UTF-8", text, count=1)


__all__ = [
    "ANSEL_COMBINING",
    "ANSEL_SPACING",
    "CHARSET_ALIASES",
    "ansel_to_utf8",
    "charset_name",
    "decode_text",
    "detect_encoding",
    "normalize_encoding",
    "utf8_to_ansel",
]
