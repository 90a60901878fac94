"""
recipient_extraction.py - Anrede und Name des Rechnungsempfängers ermitteln
===========================================================================

ÜBERBLICK
---------
Der Treiber über die Parser-Strategien aus recipient_parsers.py:

    Text  →  extract_recipient(text)  →  {"success": True,  "data": {...}}
                                      →  {"success": False, "error": "..."}

    Pfad/Bytes  →  extract_pdf_data(source)  →  (document_loader + oben)


ZWEI DURCHLÄUFE
---------------
    1. NAME: Parser in fester Reihenfolge, der erste mit nicht-leerem Namen
       gewinnt (name, extractedText, parsingMethod).

    2. ANREDE NACHTRAGEN: Hat der Gewinner keine Anrede (z.B. Antragsnummer-
       Parser), laufen alle ANDEREN Parser noch einmal; die erste nicht-leere
       Anrede wird übernommen, auch wenn der Name dieses Parsers anders
       lautet oder leer ist.

    Beispiel:
        "Antragsnummer\\n12345\\nMax Mustermann\\n...\\nHerrn\\nMax Mustermann"
        Durchlauf 1 → Antragsnummer: name="Max Mustermann", anrede=""
        Durchlauf 2 → Anrede pattern search: anrede="Herr"
        Ergebnis    → name="Max Mustermann", anrede="Herr",
                      parsingMethod="Antragsnummer"


FEHLER SIND WERTE
-----------------
Es wird NIE eine Exception nach außen gegeben. Batch-Aufrufer (main.py,
app.py) können ohne try/except über viele PDFs laufen.

    error_type      │ Bedeutung
    ────────────────┼──────────────────────────────────────────────
    "no_match"      │ Kein Parser hat einen Namen gefunden
    "source_read"   │ PDF nicht lesbar (Meldung des Loaders angehängt)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from src.document_loader import (
    PdfSourceError,
    extract_text_from_pdf,
    looks_like_empty_textlayer,
)
from src.recipient_parsers import PARSERS, PdfParser
from src.utils import prepare_text


ERROR_NO_MATCH = "no_match"
ERROR_SOURCE_READ = "source_read"

NO_MATCH_MESSAGE = (
    "Could not extract patient name from PDF. "
    "None of the parsing methods found valid data."
)

# Zusatz, wenn die PDF keinen Textlayer hat (Scan, OCR wird nicht gemacht)
NO_TEXTLAYER_HINT = " The PDF contains no readable text layer (scanned document?)."


def _failure(error: str, error_type: str) -> dict[str, Any]:
    return {"success": False, "error": error, "error_type": error_type}


def _find_name(
    text: str, parsers: tuple[PdfParser, ...]
) -> dict[str, str] | None:
    """Durchlauf 1: erster Parser mit nicht-leerem Namen."""
    for parser in parsers:
        result = parser.parse(text)
        if result is not None and result.name:
            return {
                "name": result.name,
                "anrede": result.anrede,
                "extractedText": result.extracted_text,
                "parsingMethod": parser.name,
            }
    return None


def _find_anrede(
    text: str, parsers: tuple[PdfParser, ...], skip: str
) -> str:
    """Durchlauf 2: erste nicht-leere Anrede aller anderen Parser."""
    for parser in parsers:
        if parser.name == skip:
            continue
        result = parser.parse(text)
        if result is not None and result.anrede:
            return result.anrede
    return ""


def extract_recipient(
    raw_text: str | None, parsers: tuple[PdfParser, ...] = PARSERS
) -> dict[str, Any]:
    """
    Ermittelt Anrede und Name aus dem Text einer Rechnungs-PDF.

    Parameter:
        raw_text: Text aus dem document_loader. Darf leer oder None sein.
        parsers:  Strategien in Prioritätsreihenfolge (Standard: PARSERS).

    Rückgabe:
        Erfolg:
            {"success": True, "data": {"name": "Max Mustermann",
                                       "anrede": "Herr",
                                       "extractedText": "...",
                                       "parsingMethod": "Dentklar marker"}}
            "anrede" kann "" sein (Name gefunden, Anrede nicht).
        Kein Treffer:
            {"success": False, "error": NO_MATCH_MESSAGE, "error_type": "no_match"}
    """
    text = prepare_text(raw_text)

    data = _find_name(text, parsers)
    if data is None:
        return _failure(NO_MATCH_MESSAGE, ERROR_NO_MATCH)

    if not data["anrede"]:
        data["anrede"] = _find_anrede(text, parsers, skip=data["parsingMethod"])

    return {"success": True, "data": data}


def extract_pdf_data(source: Path | str | bytes) -> dict[str, Any]:
    """
    Liest eine PDF (Pfad oder Bytes) und ermittelt Anrede und Name.

    Rückgabe:
        Wie extract_recipient(). Zusätzlich bei unlesbarer PDF:
            {"success": False, "error": <Meldung von pypdf/OS>,
             "error_type": "source_read"}
    """
    try:
        text = extract_text_from_pdf(source)
    except PdfSourceError as exc:
        return _failure(str(exc), ERROR_SOURCE_READ)

    result = extract_recipient(text)
    if not result["success"] and looks_like_empty_textlayer(text):
        result["error"] += NO_TEXTLAYER_HINT
    return result


def extract_many(sources: Iterable[Path | str | bytes]) -> list[dict[str, Any]]:
    """
    Batch-Variante: ein Ergebnis pro Quelle, in Eingabereihenfolge.

    Eine fehlerhafte PDF bricht den Batch nicht ab (Fehler sind Werte).
    """
    return [extract_pdf_data(source) for source in sources]
