"""
main.py - Batch-Auswertung aller Rechnungs-PDFs + Excel-Report
===============================================================

ÜBERBLICK
---------
Dieses Skript liest alle Rechnungs-PDFs aus einem Ordner, ermittelt pro
Datei Anrede und Name des Empfängers und schreibt das Ergebnis als
Excel-Report. Damit kann die Praxis vor einem Rechnungsversand prüfen,
für welche PDFs die Vorbelegung klappt und wo nachgetragen werden muss.

    Aufruf:   python -m src.main [ORDNER]
    Eingabe:  data/rechnungen/*.pdf   (oder ORDNER)
    Ausgabe:  empfaenger_report.xlsx  (eine Zeile pro PDF)


PIPELINE PRO PDF
----------------
    ┌─────────────────────────────────────────────────────────────────┐
    │ 1. extract_pdf_data(pdf_path)                                   │
    │    → document_loader (pypdf) + Parser-Kette                     │
    ├─────────────────────────────────────────────────────────────────┤
    │ 2. generate_message_from_template(anrede, name)                 │
    │    → vorausgefüllter E-Mail-Text                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ 3. Excel-Zeile aufbauen und an rows[] anhängen                  │
    └─────────────────────────────────────────────────────────────────┘

    Am Ende: pandas DataFrame → empfaenger_report.xlsx


EXCEL-REPORT: SPALTEN
---------------------
    run_id            Laufende Nummer (1, 2, 3, ...)
    datei             Dateiname der PDF
    erkannt           True/False: Name gefunden?
    anrede            "Herr" / "Frau" / "" (nicht gefunden)
    name              Erkannter Name
    parsing_methode   Welcher Parser den Namen geliefert hat
    fehlerart         "" / "no_match" / "source_read" / "exception"
    fehlergrund       Fehlertext (oder "")
    auszug            Die ersten Zeilen nach dem Anker (Diagnose)
    nachricht         Vorausgefüllter E-Mail-Text (nur wenn erkannt)


FEHLERBEHANDLUNG
----------------
    1. Nicht erkannte / unlesbare PDFs sind normale Zeilen (erkannt=False).
    2. Unerwartete Exceptions werden als Fehlerzeile eingetragen,
       der Batch läuft WEITER.
    3. Ist der Report in Excel geöffnet (PermissionError), wird eine
       Datei mit Zeitstempel geschrieben.
"""

import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

from src.email_template import generate_message_from_template
from src.recipient_extraction import extract_pdf_data


# =============================================================================
# PFAD-KONFIGURATION
# =============================================================================
#
#   __file__        = /projekt/src/main.py
#   .parent.parent  = /projekt/    ← BASE_DIR

BASE_DIR = Path(__file__).resolve().parent.parent
PDF_DIR = BASE_DIR / "data" / "rechnungen"
OUTPUT_PATH = BASE_DIR / "empfaenger_report.xlsx"


# =============================================================================
# 1) ZEILE PRO PDF
# =============================================================================

def build_row(run_id: int, pdf_path: Path, result: dict) -> dict:
    """
    Baut aus einem Extraktionsergebnis eine flache Excel-Zeile.

    Flaches Dict (keine Verschachtelung), damit pandas es direkt als
    DataFrame-Zeile verwenden kann. Jeder Key wird zu einer Spalte.
    """
    if result.get("success"):
        data = result["data"]
        return {
            "run_id": run_id,
            "datei": pdf_path.name,
            "erkannt": True,
            "anrede": data["anrede"],
            "name": data["name"],
            "parsing_methode": data["parsingMethod"],
            "fehlerart": "",
            "fehlergrund": "",
            "auszug": data["extractedText"],
            "nachricht": generate_message_from_template(data["anrede"], data["name"]),
        }

    return {
        "run_id": run_id,
        "datei": pdf_path.name,
        "erkannt": False,
        "anrede": "",
        "name": "",
        "parsing_methode": "",
        "fehlerart": result.get("error_type", ""),
        "fehlergrund": result.get("error", ""),
        "auszug": "",
        "nachricht": "",
    }


def process_folder(pdf_dir: Path) -> list[dict]:
    """
    Verarbeitet alle *.pdf im Ordner (sortiert, damit die Reihenfolge im
    Report unabhängig vom Dateisystem ist).
    """
    rows: list[dict] = []
    pdf_files = sorted(p for p in pdf_dir.glob("*") if p.suffix.lower() == ".pdf")

    for run_id, pdf_path in enumerate(pdf_files, start=1):
        try:
            result = extract_pdf_data(pdf_path)
        except Exception as exc:
            # Fehler in einer PDF darf den Batch nicht abbrechen
            result = {
                "success": False,
                "error": f"VERARBEITUNGSFEHLER: {type(exc).__name__}: {exc}",
                "error_type": "exception",
            }
            print(f"  ⚠ {pdf_path.name}: {result['error']}")

        rows.append(build_row(run_id, pdf_path, result))

    return rows


# =============================================================================
# 2) EXCEL-REPORT SCHREIBEN
# =============================================================================

def write_report(rows: list[dict], output_path: Path = OUTPUT_PATH) -> Path:
    """
    Schreibt den Report als .xlsx und gibt den tatsächlichen Pfad zurück.

    Windows sperrt geöffnete Excel-Dateien; dann wird eine Datei mit
    Zeitstempel daneben geschrieben.
    """
    df = pd.DataFrame(rows)

    try:
        df.to_excel(output_path, index=False)
        return output_path
    except PermissionError:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        fallback_path = output_path.with_name(f"{output_path.stem}_{ts}{output_path.suffix}")
        df.to_excel(fallback_path, index=False)
        print(f"\nWARNUNG: {output_path.name} ist gesperrt (in Excel geöffnet?).")
        return fallback_path


def main(argv: list[str] | None = None) -> int:
    """
    Batch-Einstiegspunkt.

    Rückgabe:
        Exit-Code (0 = OK, 1 = Ordner nicht gefunden)
    """
    argv = sys.argv[1:] if argv is None else argv
    pdf_dir = Path(argv[0]) if argv else PDF_DIR

    if not pdf_dir.is_dir():
        print(f"Ordner nicht gefunden: {pdf_dir}")
        return 1

    rows = process_folder(pdf_dir)
    output_path = write_report(rows, OUTPUT_PATH)
    print(f"\nReport geschrieben nach: {output_path}")

    # ── Zusammenfassung auf der Konsole ──
    total = len(rows)
    found = sum(1 for r in rows if r["erkannt"])
    partial = sum(1 for r in rows if r["erkannt"] and not r["anrede"])
    unreadable = sum(1 for r in rows if r["fehlerart"] in ("source_read", "exception"))

    print(f"\n{'='*50}")
    print(f"Batch abgeschlossen: {total} PDFs verarbeitet")
    print(f"  ✓ {found} erkannt ({partial} davon ohne Anrede)")
    print(f"  ✗ {total - found - unreadable} nicht erkannt (manuell eintragen)")
    if unreadable:
        print(f"  ⚠ {unreadable} nicht lesbar (siehe fehlergrund)")
    print(f"{'='*50}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
