import json
import shutil
import tempfile
from io import BytesIO

from django.test import override_settings

from analyzer.exceptions import GenerationError
from analyzer.models import Analysis, Clause, Contract

CONTRACT_TEXT = """SERVICES AGREEMENT

This Agreement is made between Acme Corp (the "Client") and Widget Ltd (the "Supplier").

1. Liability. The Supplier shall be liable for all damages, including consequential damages, without limit.
2. Termination. Either party may terminate this Agreement with 15 days written notice.
3. Payment. The Client will pay each invoice within 30 days of receipt.
"""

THREE_CLAUSES = [
    {
        "type": "liability",
        "originalText": "The Supplier shall be liable for all damages, including consequential damages, without limit.",
        "riskLevel": "high",
        "plainLanguageExplanation": "The supplier's liability has no cap.",
        "riskReasons": ["No liability cap", "Includes consequential damages"],
        "isOverride": False,
        "overrideJustification": None,
    },
    {
        "type": "termination",
        "originalText": "Either party may terminate this Agreement with 15 days written notice.",
        "riskLevel": "medium",
        "plainLanguageExplanation": "Either side can end the deal on short notice.",
        "riskReasons": ["Notice period under 30 days"],
        "isOverride": False,
        "overrideJustification": None,
    },
    {
        "type": "payment",
        "originalText": "The Client will pay each invoice within 30 days of receipt.",
        "riskLevel": "low",
        "plainLanguageExplanation": "Invoices are due within a month.",
        "riskReasons": ["Net 30 terms"],
        "isOverride": False,
        "overrideJustification": None,
    },
]


def analysis_reply(clauses=None, overall="high", summary="A services agreement with uncapped liability."):
    return json.dumps({
        "clauses": THREE_CLAUSES if clauses is None else clauses,
        "overallRiskLevel": overall,
        "summary": summary,
    })


class ScriptedGateway:
    """Stands in for ModelGateway, replaying canned replies in order.

    An entry that is an exception instance is raised instead of returned.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def generate(self, messages, system=None, max_tokens=1024):
        self.calls.append({"messages": messages, "system": system, "max_tokens": max_tokens})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def failing_gateway():
    return ScriptedGateway(GenerationError())


class TempUploadDirMixin:
    def setUp(self):
        super().setUp()
        self.upload_dir = tempfile.mkdtemp()
        override = override_settings(UPLOAD_DIR=self.upload_dir)
        override.enable()
        self.addCleanup(override.disable)
        self.addCleanup(shutil.rmtree, self.upload_dir, ignore_errors=True)


def make_contract(text=CONTRACT_TEXT, name="agreement.txt", file_path="/nonexistent/agreement.txt"):
    return Contract.objects.create(
        filename="stored.txt",
        original_name=name,
        file_type="txt",
        file_size=len(text.encode()),
        file_path=file_path,
        extracted_text=text,
    )


def make_analysis(contract, clauses=None, overall="high", summary="Uncapped liability."):
    clauses = THREE_CLAUSES if clauses is None else clauses
    analysis = Analysis.objects.create(
        contract=contract, overall_risk_level=overall, summary=summary, raw_response={},
    )
    for c in clauses:
        Clause.objects.create(
            analysis=analysis,
            type=c["type"],
            original_text=c["originalText"],
            risk_level=c["riskLevel"],
            plain_language_explanation=c["plainLanguageExplanation"],
            risk_reasons=c["riskReasons"],
            is_override=c["isOverride"],
            override_justification=c["overrideJustification"],
        )
    return analysis


def make_pdf(lines):
    from reportlab.pdfgen import canvas

    buf = BytesIO()
    c = canvas.Canvas(buf)
    y = 800
    for line in lines:
        c.drawString(40, y, line)
        y -= 14
    c.save()
    return buf.getvalue()


def make_encrypted_pdf(lines, password):
    from reportlab.pdfgen import canvas

    buf = BytesIO()
    c = canvas.Canvas(buf, encrypt=password)
    y = 800
    for line in lines:
        c.drawString(40, y, line)
        y -= 14
    c.save()
    return buf.getvalue()


def make_image_only_pdf():
    from reportlab.pdfgen import canvas

    buf = BytesIO()
    c = canvas.Canvas(buf)
    c.setFillColorRGB(0.2, 0.2, 0.2)
    c.rect(100, 500, 200, 150, fill=1)
    c.save()
    return buf.getvalue()


def make_docx(paragraphs, table=None):
    from docx import Document

    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    if table:
        t = doc.add_table(rows=1, cols=len(table))
        for i, value in enumerate(table):
            t.cell(0, i).text = value
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()
