from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from .prompts import CLAUSE_TYPE_NAMES, DISCLAIMER_TEXT

RISK_COLORS = {
    'high': colors.HexColor('#dc3545'),
    'medium': colors.HexColor('#ffc107'),
    'low': colors.HexColor('#28a745'),
}


def _styles():
    base = getSampleStyleSheet()
    return {
        'title': ParagraphStyle('title', parent=base['Title'], textColor=colors.HexColor('#1a365d'), alignment=0),
        'meta': ParagraphStyle('meta', parent=base['Normal'], fontSize=9, textColor=colors.HexColor('#666666')),
        'heading': ParagraphStyle('heading', parent=base['Heading2'], textColor=colors.HexColor('#333333')),
        'clause': ParagraphStyle('clause', parent=base['Heading3']),
        'body': ParagraphStyle('body', parent=base['Normal'], leading=14),
        'quote': ParagraphStyle(
            'quote', parent=base['Normal'], leftIndent=8 * mm, fontName='Helvetica-Oblique',
            textColor=colors.HexColor('#444444'), leading=14,
        ),
        'footer': ParagraphStyle('footer', parent=base['Normal'], fontSize=8, textColor=colors.HexColor('#888888')),
    }


def _risk_label(level):
    color = RISK_COLORS.get(level, colors.black).hexval()[2:]
    return f'<font color="#{color}"><b>{level.upper()} RISK</b></font>'


def build_report_pdf(contract, analysis) -> bytes:
    """Render the contract analysis as a downloadable PDF report."""
    styles = _styles()
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=A4,
        leftMargin=18 * mm, rightMargin=18 * mm, topMargin=18 * mm, bottomMargin=18 * mm,
        title=f"Contract Analysis - {contract.original_name}",
    )

    story = [
        Paragraph('Contract Analysis Report', styles['title']),
        Paragraph(
            f"{escape(contract.original_name)}  |  Analyzed {contract.created_at:%b %d, %Y}",
            styles['meta'],
        ),
        Spacer(1, 6 * mm),
    ]

    if analysis is None:
        story.append(Paragraph('No analysis is available for this contract.', styles['body']))
    else:
        clauses = list(analysis.clauses.all())
        counts = {level: sum(1 for c in clauses if c.risk_level == level) for level in ('high', 'medium', 'low')}

        story += [
            Paragraph('Overall Risk', styles['heading']),
            Paragraph(_risk_label(analysis.overall_risk_level), styles['body']),
            Paragraph(
                f"{counts['high']} high   {counts['medium']} medium   {counts['low']} low",
                styles['meta'],
            ),
            Spacer(1, 4 * mm),
            Paragraph('Summary', styles['heading']),
            Paragraph(escape(analysis.summary), styles['body']),
            Spacer(1, 4 * mm),
            Paragraph('Clause Analysis', styles['heading']),
        ]

        if not clauses:
            story.append(Paragraph('None of the tracked clause types were found.', styles['body']))

        for clause in clauses:
            story += [
                Paragraph(
                    f"{CLAUSE_TYPE_NAMES.get(clause.type, clause.type)}   "
                    f"{_risk_label(clause.risk_level)}",
                    styles['clause'],
                ),
                Paragraph(f"“{escape(clause.original_text)}”", styles['quote']),
                Spacer(1, 2 * mm),
                Paragraph(escape(clause.plain_language_explanation), styles['body']),
            ]
            for reason in clause.risk_reasons or []:
                story.append(Paragraph(f"• {escape(reason)}", styles['body']))
            if clause.is_override and clause.override_justification:
                story.append(Paragraph(
                    f"<b>Note:</b> {escape(clause.override_justification)}", styles['body'],
                ))
            story.append(Spacer(1, 4 * mm))

    story += [Spacer(1, 8 * mm), Paragraph(DISCLAIMER_TEXT, styles['footer'])]
    doc.build(story)
    return buffer.getvalue()
