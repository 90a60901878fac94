"""
email_template.py

Rechnungs-E-Mail aus Vorlage erzeugen.

Platzhalter:
    {{ANREDE_SUFFIX}}  "r" bei "Herr" ("Sehr geehrter Herr ..."), sonst ""
    {{ANREDE}}         "Herr", "Frau", ... oder ""
    {{NAME}}           Name des Empfängers

Wird verwendet von:
- app.py   (Vorbelegung des Nachrichtenfelds nach dem PDF-Upload)
- main.py  (Spalte "nachricht" im Report)
"""

from __future__ import annotations

import re


INVOICE_TEMPLATE = """Sehr geehrte{{ANREDE_SUFFIX}} {{ANREDE}} {{NAME}},

anbei erhalten Sie Ihre Rechnung für die zahnärztliche Behandlung in unserer Praxis.

Bitte überweisen Sie den Rechnungsbetrag innerhalb von 14 Tagen auf das in der Rechnung angegebene Konto.

Bei Fragen zu Ihrer Rechnung stehen wir Ihnen gerne zur Verfügung.

Mit freundlichen Grüßen
Ihre Zahnarztpraxis
ZÄ Turan & Kaganaslan"""

DEFAULT_SUBJECT = "Ihre Rechnung"


def generate_message_from_template(
    anrede: str, name: str, template: str = INVOICE_TEMPLATE
) -> str:
    """
    Ersetzt alle Platzhalter in der Vorlage.

    Beispiel:
        ("Herr", "Max Mustermann") → "Sehr geehrter Herr Max Mustermann, ..."
        ("Frau", "Erika Muster")   → "Sehr geehrte Frau Erika Muster, ..."
        ("", "Max Mustermann")     → "Sehr geehrte Max Mustermann, ..."
    """
    anrede = (anrede or "").strip()
    name = (name or "").strip()
    suffix = "r" if anrede == "Herr" else ""

    message = template
    for placeholder, value in (
        ("{{ANREDE_SUFFIX}}", suffix),
        ("{{ANREDE}}", anrede),
        ("{{NAME}}", name),
    ):
        if value:
            message = message.replace(placeholder, value)
        else:
            # Leerer Platzhalter nimmt das Leerzeichen davor mit,
            # der Rest der Vorlage bleibt unverändert
            message = re.sub(r"[ \t]?" + re.escape(placeholder), "", message)
    return message


def build_subject(name: str, subject: str | None = None) -> str:
    """Expliziter Betreff oder "Ihre Rechnung - <Name>"."""
    if subject and subject.strip():
        return subject.strip()
    name = (name or "").strip()
    return f"{DEFAULT_SUBJECT} - {name}" if name else DEFAULT_SUBJECT
