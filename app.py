import streamlit as st


# Module aus dem Projekt
from src.email_template import build_subject, generate_message_from_template
from src.recipient_extraction import extract_pdf_data

ANREDE_OPTIONS = ["", "Herr", "Frau", "Dr.", "Prof."]

# Session-State initialisieren:
# - results: speichert (Dateiname, Extraktionsergebnis)-Tupel
if "results" not in st.session_state:
    st.session_state["results"] = []

# ---------------------------------------------------------
# Titel der Seite
# ---------------------------------------------------------
st.title("Rechnungsmail")
st.markdown(
    "Rechnungs-PDF hochladen: Anrede und Name des Empfängers werden aus der "
    "Rechnung gelesen und in die E-Mail-Vorlage eingesetzt."
)

# ---------------------------------------------------------
# Abschnitt: Datei-Upload (mehrere PDFs in einem Feld)
# ---------------------------------------------------------
st.header("Rechnungen hochladen")

uploaded_files = st.file_uploader(
    "Rechnung(en) als PDF hochladen",
    type=["pdf"],
    accept_multiple_files=True,
)

# ---------------------------------------------------------
# Button löst die Erkennung aus
# ---------------------------------------------------------
if st.button("Empfänger erkennen"):
    if not uploaded_files:
        st.warning("Es wurden keine Rechnungen hochgeladen.")
        st.stop()

    with st.spinner("Rechnungen werden gelesen ..."):
        # Bytes direkt an den Loader geben, kein Temp-Verzeichnis nötig
        st.session_state["results"] = [
            (f.name, extract_pdf_data(f.getvalue())) for f in uploaded_files
        ]

    st.success("Erkennung abgeschlossen.")


# ---------------------------------------------------------
# Ergebnis-Anzeige: ein Formular pro Rechnung
# ---------------------------------------------------------
results = st.session_state["results"]

for idx, (file_name, result) in enumerate(results):
    st.markdown("---")
    st.markdown(f"#### 📄 {file_name}")

    data = result.get("data", {}) if result.get("success") else {}

    if result.get("success"):
        anrede_text = f"{data['anrede']} " if data["anrede"] else ""
        st.success(f"Erkannt: {anrede_text}{data['name']} ({data['parsingMethod']})")
        if not data["anrede"]:
            st.info("Keine Anrede gefunden, bitte auswählen.")
    elif result.get("error_type") == "source_read":
        st.error(f"PDF konnte nicht gelesen werden: {result['error']}")
    else:
        st.warning(
            "Name konnte nicht automatisch erkannt werden, "
            "bitte manuell eintragen."
        )

    anrede_default = data.get("anrede", "")
    if anrede_default not in ANREDE_OPTIONS:
        anrede_default = ""

    anrede = st.selectbox(
        "Anrede",
        ANREDE_OPTIONS,
        index=ANREDE_OPTIONS.index(anrede_default),
        key=f"anrede_{idx}",
    )
    name = st.text_input("Name", value=data.get("name", ""), key=f"name_{idx}")
    st.text_input("Empfänger-E-Mail", key=f"email_{idx}")
    st.text_input("Betreff", value=build_subject(name), key=f"subject_{idx}")
    st.text_area(
        "Nachricht",
        value=generate_message_from_template(anrede, name),
        height=300,
        key=f"message_{idx}",
    )

    if data.get("extractedText"):
        with st.expander("Erkannter Textausschnitt"):
            st.code(data["extractedText"])
