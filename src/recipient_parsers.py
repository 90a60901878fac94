"""
recipient_parsers.py - Parser-Strategien für Anrede und Name aus Rechnungs-PDFs
================================================================================

ÜBERBLICK
---------
Dieses Modul enthält die einzelnen Heuristiken, mit denen aus dem Text einer
Rechnungs-PDF die Anrede ("Herr"/"Frau") und der Name des Empfängers gelesen
werden. Jede Heuristik ist eine eigenständige Strategie:

    Text  →  Parser.parse(text)  →  ParserResult(name, anrede, extracted_text)
                                 →  None  (Layout nicht erkannt)

Die Strategien wissen NICHTS voneinander. Reihenfolge, "erster Treffer
gewinnt" und das Nachtragen der Anrede macht der Treiber in
recipient_extraction.py.


DIE VIER STRATEGIEN (in Prioritätsreihenfolge)
-----------------------------------------------
    ┌──────────────────────────┬──────────────────────────────────────────┐
    │ Parser                   │ Anker                                    │
    ├──────────────────────────┼──────────────────────────────────────────┤
    │ Antragsnummer            │ Wort "Antragsnummer"                     │
    │ Dentklar marker          │ Absenderzeile Dentklar (Layout A)        │
    │ ZÄ Turan marker          │ Absenderzeile ZÄ Turan (Layout B)        │
    │ Anrede pattern search    │ kein Anker: "Herrn/Herr/Frau" + Zeile    │
    └──────────────────────────┴──────────────────────────────────────────┘

    Von oben nach unten: spezifischer → riskanter (mehr False-Positives).


ZEILEN STATT POSITIONEN
-----------------------
pypdf liefert den Textlayer ohne verlässliche Spalten/Koordinaten. Alle
Parser arbeiten deshalb nur mit der REIHENFOLGE nicht-leerer Zeilen nach
dem Anker. Leere Zeilen werden immer vorher entfernt.

Beispiel (Layout B):
    Zeile 0: "ZÄ Turan & Kaganaslan, Nassauische Str. 30, 10717 Berlin"  ← Anker
    Zeile 1: "Frau"                                                      ← Anrede
    Zeile 2: "Erika Musterfrau"                                          ← Name
    Zeile 3: "Musterweg 5"
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from src.utils import first_lines, non_blank_lines, normalize_anrede


# =============================================================================
# ANKER (Marker) DER BEKANNTEN RECHNUNGSLAYOUTS
# =============================================================================
#
# Die Marker werden EXAKT (case-sensitive) gesucht. Ändert die Praxis ihre
# Absenderzeile im Rechnungsprogramm, muss der Marker hier nachgezogen werden.

MARKER_ANTRAGSNUMMER = "Antragsnummer"

# Layout A: Rechnungen aus dem Dentklar-Abrechnungsprogramm
MARKER_DENTKLAR = (
    "Ugur Kaganaslan, Dentklar Digital Dental Studio BaG, "
    "Nassauische Str. 30,10717 Berlin"
)

# Layout B: Rechnungen der Praxis ZÄ Turan & Kaganaslan
MARKER_TURAN = "ZÄ Turan & Kaganaslan, Nassauische Str. 30, 10717 Berlin"

# Wie viele nicht-leere Zeilen nach dem Anker nach einer Anrede gesucht wird
DENTKLAR_TITLE_WINDOW = 3
TURAN_TITLE_WINDOW = 5

# Länge des Diagnose-Auszugs (extracted_text)
EXCERPT_LINES = 5


# =============================================================================
# REGEX-MUSTER
# =============================================================================

# Zeile, die nur aus der Anrede besteht: "Herrn", "HERR", "frau"
_TITLE_LINE = re.compile(r"(Herrn|Herr|Frau)", re.IGNORECASE)

# Wie oben, zusätzlich akademische Titel (Layout B setzt manchmal nur "Dr.")
_TITLE_LINE_EXTENDED = re.compile(r"(Herrn|Herr|Frau|Dr\.|Prof\.)", re.IGNORECASE)

# Zeile, die nur die Antragsnummer selbst trägt: "12345", ": 12345", "# 0815"
# oder nur Satzzeichen vom Label übrig hat: ":", " - "
_NUMBER_LINE = re.compile(r"^[\s:#.\-]*(\d|$)")

# Adressfragmente, die NICHT als Name durchgehen dürfen:
#   "Str. 12", "Straße 5", "D 10717", "D10717"
_ADDRESS_LINE = re.compile(r"^(Str\.|Straße|str\.|D\s*\d)", re.IGNORECASE)

# Fallback ohne Anker: Anrede, Zeilenumbruch, zwei Wörter
# Vor dem Umbruch nur Leerzeichen/Tabs, kein weiteres \n.
#   "Herrn\nMax Mustermann"  → ("Herrn", "Max Mustermann")
#   "Frau \n  Anna-Lena Groß" → ("Frau", "Anna-Lena Groß")
_ANREDE_PATTERN = re.compile(
    r"(Herrn|Herr|Frau)[^\S\n]*\n\s*([A-ZÄÖÜa-zäöüß\-]+\s+[A-ZÄÖÜa-zäöüß\-]+)",
    re.IGNORECASE,
)


# =============================================================================
# DATENTYPEN
# =============================================================================

@dataclass(frozen=True)
class ParserResult:
    """Kandidat einer einzelnen Strategie (noch nicht ausgewählt)."""
    name: str
    anrede: str
    extracted_text: str


@dataclass(frozen=True)
class PdfParser:
    """Eine Strategie: Bezeichner + parse(text) -> ParserResult | None."""
    name: str
    parse: Callable[[str], Optional[ParserResult]]


def _lines_after_marker(text: str, marker: str) -> list[str] | None:
    """
    Nicht-leere Zeilen ab dem ersten Vorkommen des Markers.

    Die erste Zeile ist der Rest der Marker-Zeile (falls dort noch etwas
    steht), danach folgen die weiteren Zeilen.

    Rückgabe:
        None, wenn der Marker nicht im Text vorkommt.
    """
    idx = text.find(marker)
    if idx == -1:
        return None
    return non_blank_lines(text[idx + len(marker):])


# =============================================================================
# STRATEGIE a) ANTRAGSNUMMER
# =============================================================================

def parse_antragsnummer(text: str) -> ParserResult | None:
    """
    Name steht in der ersten Zeile nach der Antragsnummer.

        Antragsnummer
        12345             ← Nummer selbst, wird übersprungen
        John Smith        ← Name

    Zeilen, die mit einer Ziffer beginnen oder nur aus Satzzeichen bestehen
    (":" vom Label "Antragsnummer:"), sind nie ein Name und werden
    übersprungen. Abgelehnt (→ None) wird der Kandidat, wenn er wie ein
    Adressfragment aussieht ("Str. 30", "D 10717") oder nach der Nummer
    keine Zeile mehr folgt. Diese Strategie liefert nie eine Anrede.
    """
    lines = _lines_after_marker(text, MARKER_ANTRAGSNUMMER)
    if not lines:
        return None

    # Zeilen mit der Antragsnummer überspringen (": 12345", "12345", ":")
    start = 0
    while start < len(lines) and _NUMBER_LINE.match(lines[start]):
        start += 1
    if start >= len(lines):
        return None

    potential_name = lines[start].strip()
    if _ADDRESS_LINE.match(potential_name):
        return None

    return ParserResult(
        name=potential_name,
        anrede="",
        extracted_text=first_lines(lines, EXCERPT_LINES),
    )


# =============================================================================
# STRATEGIE b) DENTKLAR-MARKER (Layout A)
# =============================================================================

def parse_dentklar_marker(text: str) -> ParserResult | None:
    """
    Layout A: nach der Absenderzeile folgt innerhalb von 3 Zeilen die Anrede
    als eigene Zeile, direkt darunter der Name.

    Ohne Anrede im Fenster → None. Steht nach der Anrede keine Zeile mehr,
    wird ein Kandidat mit leerem Namen geliefert (die Anrede ist dann
    trotzdem für den Nachtrag im Treiber brauchbar).
    """
    lines = _lines_after_marker(text, MARKER_DENTKLAR)
    if not lines:
        return None

    for i, line in enumerate(lines[:DENTKLAR_TITLE_WINDOW]):
        token = line.strip()
        if _TITLE_LINE.fullmatch(token):
            name = lines[i + 1].strip() if i + 1 < len(lines) else ""
            return ParserResult(
                name=name,
                anrede=normalize_anrede(token),
                extracted_text=first_lines(lines, EXCERPT_LINES),
            )

    return None


# =============================================================================
# STRATEGIE c) ZÄ-TURAN-MARKER (Layout B)
# =============================================================================

def parse_turan_marker(text: str) -> ParserResult | None:
    """
    Layout B: bis zu 5 Zeilen nach der Absenderzeile nach einer Anrede oder
    einem Titel ("Dr.", "Prof.") suchen; der Name ist die Zeile danach.

    Ohne Titel im Fenster gilt die erste Zeile nach dem Marker als Name,
    weil manche Rechnungen den Namen ohne Anrede an den Anfang setzen.
    Das ist eine bekannte Schwachstelle: Steht vor dem Empfängerblock noch
    anderer Text, wird dieser als Name übernommen.
    """
    lines = _lines_after_marker(text, MARKER_TURAN)
    if not lines:
        return None

    anrede = ""
    name_index = 0
    for i, line in enumerate(lines[:TURAN_TITLE_WINDOW]):
        token = line.strip()
        if _TITLE_LINE_EXTENDED.fullmatch(token):
            anrede = normalize_anrede(token)
            name_index = i + 1
            break

    name = lines[name_index].strip() if name_index < len(lines) else ""
    if not name:
        return None

    return ParserResult(
        name=name,
        anrede=anrede,
        extracted_text=first_lines(lines, EXCERPT_LINES),
    )


# =============================================================================
# STRATEGIE d) ANREDE-MUSTER IM GESAMTEN TEXT (Fallback)
# =============================================================================

def parse_anrede_pattern(text: str) -> ParserResult | None:
    """
    Sucht im GANZEN Text das erste "Herrn/Herr/Frau" mit Zeilenumbruch und
    zwei Namens-Wörtern danach. Kein Marker nötig.
    """
    match = _ANREDE_PATTERN.search(text)
    if not match:
        return None

    # Der Namensteil kann über einen Zeilenumbruch laufen ("Max\nMustermann")
    name = " ".join(match.group(2).split())

    return ParserResult(
        name=name,
        anrede=normalize_anrede(match.group(1)),
        extracted_text=first_lines(non_blank_lines(text[match.start():]), EXCERPT_LINES),
    )


# =============================================================================
# REIHENFOLGE
# =============================================================================
#
# Erste Strategie mit Namen gewinnt; die übrigen dürfen nur noch die
# Anrede nachliefern (siehe recipient_extraction.extract_recipient).

PARSERS: tuple[PdfParser, ...] = (
    PdfParser("Antragsnummer", parse_antragsnummer),
    PdfParser("Dentklar marker", parse_dentklar_marker),
    PdfParser("ZÄ Turan marker", parse_turan_marker),
    PdfParser("Anrede pattern search", parse_anrede_pattern),
)
