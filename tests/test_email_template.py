"""
Tests for the invoice email template.
"""

from src.email_template import DEFAULT_SUBJECT, build_subject, generate_message_from_template


class TestGenerateMessage:
    """Test placeholder substitution."""

    def test_herr_gets_suffix(self):
        message = generate_message_from_template("Herr", "Max Mustermann")
        assert message.startswith("Sehr geehrter Herr Max Mustermann,\n")

    def test_frau_without_suffix(self):
        message = generate_message_from_template("Frau", "Erika Musterfrau")
        assert message.startswith("Sehr geehrte Frau Erika Musterfrau,\n")

    def test_missing_anrede_leaves_no_double_space(self):
        message = generate_message_from_template("", "Max Mustermann")
        assert message.startswith("Sehr geehrte Max Mustermann,\n")

    def test_missing_name_and_anrede(self):
        message = generate_message_from_template("", "")
        assert message.startswith("Sehr geehrte,\n")

    def test_missing_name_keeps_anrede(self):
        message = generate_message_from_template("Herr", "")
        assert message.startswith("Sehr geehrter Herr,\n")

    def test_custom_template_layout_is_kept(self):
        template = "Hallo {{ANREDE}} {{NAME}},\n\n    Betrag:    120,00 EUR\nDatum:  01.02.2024"
        message = generate_message_from_template("", "Max", template)
        assert message == "Hallo Max,\n\n    Betrag:    120,00 EUR\nDatum:  01.02.2024"

    def test_all_placeholders_replaced(self):
        template = "{{ANREDE}} {{NAME}} / {{ANREDE}} {{NAME}}{{ANREDE_SUFFIX}}"
        assert generate_message_from_template("Herr", "Max", template) == "Herr Max / Herr Maxr"
        assert "{{" not in generate_message_from_template("Frau", "Erika")

    def test_body_is_kept(self):
        message = generate_message_from_template("Frau", "Erika Musterfrau")
        assert "innerhalb von 14 Tagen" in message
        assert message.endswith("ZÄ Turan & Kaganaslan")


class TestBuildSubject:
    """Test subject defaults."""

    def test_explicit_subject(self):
        assert build_subject("Max", "  Rechnung März ") == "Rechnung März"

    def test_default_with_name(self):
        assert build_subject("Max Mustermann") == f"{DEFAULT_SUBJECT} - Max Mustermann"

    def test_default_without_name(self):
        assert build_subject("", "   ") == DEFAULT_SUBJECT
