"""
utils.py

Gemeinsame Hilfsfunktionen für Text-Vorbereitung und Anrede-Normalisierung.

Wird verwendet von:
- recipient_parsers.py     (die einzelnen Parser-Strategien)
- recipient_extraction.py  (Treiber: Text vorbereiten vor dem ersten Parser)
"""

from __future__ import annotations

import re


# Leerzeichen-Varianten, die pypdf aus manchen Rechnungs-PDFs liefert:
#   U+00A0  geschütztes Leerzeichen (NBSP)
#   U+2007  Ziffern-Leerzeichen
#   U+202F  schmales geschütztes Leerzeichen
#   U+2009  schmales Leerzeichen
_SPACE_VARIANTS = re.compile(r"[\u00a0\u2007\u202f\u2009]")

# Byte Order Mark (U+FEFF), steht bei manchen Exporten am Seitenanfang.
# str.strip() entfernt es nicht, eine BOM-Zeile wäre sonst "nicht leer".
_BYTE_ORDER_MARK = "\ufeff"

# Kanonische Formen für die bekannten Anrede-Tokens.
# "Herrn" ist der Akkusativ aus dem Adressfeld ("Herrn Max Mustermann")
# und wird auf den Nominativ zurückgeführt.
_ANREDE_LOOKUP = {
    "herrn": "Herr",
    "herr": "Herr",
    "frau": "Frau",
}


def prepare_text(text: str | None) -> str:
    """
    Bereitet den Rohtext aus dem PDF für die zeilenbasierten Parser vor.

    - None -> ""
    - Windows-/Mac-Zeilenumbrüche (\\r\\n, \\r) -> \\n
    - NBSP und verwandte Leerzeichen -> normales Leerzeichen
    - Byte Order Mark wird entfernt

    Beispiel:
      "ZÄ Turan\\u00a0& Kaganaslan\\r\\nHerrn" -> "ZÄ Turan & Kaganaslan\\nHerrn"
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace(_BYTE_ORDER_MARK, "")
    return _SPACE_VARIANTS.sub(" ", text)


def non_blank_lines(text: str) -> list[str]:
    """
    Splittet an \\n und verwirft Zeilen, die nach strip() leer sind.

    Die Zeilen selbst bleiben unverändert (nicht getrimmt), damit der
    Diagnose-Auszug so aussieht wie im PDF.
    """
    return [line for line in text.split("\n") if line.strip()]


def first_lines(lines: list[str], n: int = 5) -> str:
    """Diagnose-Auszug: die ersten n Zeilen, mit \\n verbunden."""
    return "\n".join(lines[:n])


def normalize_anrede(anrede: str) -> str:
    """
    Normalisiert ein erkanntes Anrede-Token.

        "Herrn" / "HERRN" -> "Herr"
        "FRAU"            -> "Frau"
        "dr."             -> "Dr."
        "prof."           -> "Prof."

    Zuerst Lookup für die bekannten Tokens, sonst generisch:
    erstes Zeichen groß, Rest klein.
    """
    token = (anrede or "").strip()
    if not token:
        return ""
    known = _ANREDE_LOOKUP.get(token.lower())
    if known:
        return known
    return token[:1].upper() + token[1:].lower()
