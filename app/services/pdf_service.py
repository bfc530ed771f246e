"""
PDF Service - Certificate of participation rendering
"""
from io import BytesIO
from datetime import datetime

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas


def render_certificate_pdf(
    recipient_name: str,
    event_title: str,
    event_date: datetime,
    organizer_name: str,
    certificate_number: str,
    verification_hash: str,
    issuer_name: str
) -> bytes:
    """Render a one page A4 landscape certificate and return the PDF bytes"""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=landscape(A4))
    width, height = landscape(A4)

    # Border
    c.setStrokeColor(colors.HexColor('#1f2937'))
    c.setLineWidth(3)
    c.rect(0.4 * inch, 0.4 * inch, width - 0.8 * inch, height - 0.8 * inch)

    c.setFillColor(colors.HexColor('#1f2937'))
    c.setFont('Helvetica-Bold', 30)
    c.drawCentredString(width / 2, height - 1.6 * inch, 'Certificate of Participation')

    c.setFont('Helvetica', 14)
    c.drawCentredString(width / 2, height - 2.4 * inch, 'This is to certify that')

    c.setFont('Helvetica-Bold', 24)
    c.drawCentredString(width / 2, height - 3.1 * inch, recipient_name)

    c.setFont('Helvetica', 14)
    c.drawCentredString(width / 2, height - 3.8 * inch, 'has participated in')

    c.setFont('Helvetica-Bold', 18)
    c.drawCentredString(width / 2, height - 4.4 * inch, event_title)

    c.setFont('Helvetica', 12)
    c.drawCentredString(width / 2, height - 5.0 * inch, f"held on {event_date.strftime('%d %B %Y')}")

    c.setFont('Helvetica', 11)
    c.drawString(1.0 * inch, 1.5 * inch, f"Organizer: {organizer_name}")
    c.drawString(1.0 * inch, 1.2 * inch, f"Issued by: {issuer_name}")

    c.setFillColor(colors.HexColor('#6b7280'))
    c.setFont('Helvetica', 9)
    c.drawRightString(width - 1.0 * inch, 1.5 * inch, f"Certificate No: {certificate_number}")
    c.drawRightString(width - 1.0 * inch, 1.2 * inch, f"Verification: {verification_hash}")

    c.showPage()
    c.save()
    return buffer.getvalue()
