"""
document_loader.py - PDF-Text-Extraktion für Rechnungs-PDFs
===========================================================

ÜBERBLICK
---------
Dieses Modul liest den Textlayer einer Rechnungs-PDF. Es ist der erste
Schritt, noch VOR der Empfänger-Erkennung:

    PDF-Datei / Upload-Bytes  →  document_loader  →  Text  →  recipient_extraction

Rechnungen aus den Praxis-Programmen werden digital erzeugt und haben
immer einen Textlayer. Eingescannte Rechnungen (ohne Textlayer) werden
NICHT per OCR gelesen; sie liefern leeren Text und landen damit bei der
manuellen Eingabe.


SEITENTRENNUNG
--------------
Die Texte der einzelnen Seiten werden mit einer Leerzeile verbunden.
Die Parser filtern Leerzeilen ohnehin heraus, die Zeilen-Nachbarschaft
über die Seitengrenze bleibt also erhalten:

    Seite 1: "... Antragsnummer"
    Seite 2: "12345\\nJohn Smith"
    → "... Antragsnummer\\n\\n12345\\nJohn Smith"


FEHLER
------
Kaputte oder nicht lesbare PDFs lösen PdfSourceError aus. Die Meldung der
darunterliegenden Exception (OSError, pypdf.errors.PyPdfError, aber auch
ValueError/TypeError aus dem pypdf-Parser) wird übernommen, damit sie in
der UI / im Report angezeigt werden kann.
"""

from __future__ import annotations

import io
from pathlib import Path

from pypdf import PdfReader             # PDF-Parsing: Textlayer auslesen


# Unterhalb dieser Zeichenzahl gilt ein Textlayer als "nicht vorhanden"
# (typisch für eingescannte Rechnungen).
MIN_TEXTLAYER_CHARS = 25

PAGE_SEPARATOR = "\n\n"


class PdfSourceError(Exception):
    """Die PDF konnte nicht gelesen werden (Datei fehlt, defekt, verschlüsselt, ...)."""


def looks_like_empty_textlayer(text: str) -> bool:
    """
    Prüft, ob die PDF praktisch keinen Textlayer hat.

    Rückgabe:
        True  → kaum/kein Text (vermutlich Scan)
        False → Textlayer vorhanden
    """
    return len((text or "").strip()) < MIN_TEXTLAYER_CHARS


def extract_text_from_pdf(source: Path | str | bytes) -> str:
    """
    Extrahiert den gesamten Text aus einer PDF-Datei.

    Parameter:
        source: Pfad zur PDF-Datei ODER der Dateiinhalt als bytes
                (z.B. aus einem Streamlit-Upload).

    Rückgabe:
        Text aller Seiten, getrennt durch eine Leerzeile.
        Seiten ohne Text werden herausgefiltert.

    Raises:
        PdfSourceError: Datei nicht lesbar oder keine gültige PDF.
    """
    try:
        if isinstance(source, (bytes, bytearray)):
            reader = PdfReader(io.BytesIO(source))
        else:
            reader = PdfReader(Path(source))

        parts: list[str] = []
        for page in reader.pages:
            # extract_text() gibt "" bei reinen Bild-Seiten zurück
            text = (page.extract_text() or "").strip()
            if text:
                parts.append(text)
    except Exception as exc:
        # pypdf meldet defekte Dateien nicht nur über PyPdfError, sondern
        # auch mit ValueError, TypeError, KeyError, ...
        raise PdfSourceError(str(exc) or type(exc).__name__) from exc

    return PAGE_SEPARATOR.join(parts)
