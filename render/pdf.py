"""Receipt PDF rendering with ReportLab."""
from __future__ import annotations
import html
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.config import config
from core.logger import get_logger
from models.receipt import ReceiptRecord
from render.preview import PreviewSection, build_preview

log = get_logger("render/pdf")

# Helvetica has no rupee glyph
PDF_CURRENCY = "Rs. "
THANK_YOU_NOTE = (
    "Thank you for choosing us. We acknowledge the receipt of your payment and truly "
    "appreciate your trust. Be assured of our best services at all times."
)


def _load_logo(path: Optional[Path]) -> Optional[Image]:
    """Return a logo flowable, or ``None`` when the image cannot be read."""
    if not path:
        return None
    try:
        reader = ImageReader(str(path))
        width, height = reader.getSize()
    except Exception as e:
        log.warning(f"Receipt logo unavailable, rendering without it: path={path} error={e!r}")
        return None
    target_h = 14 * mm
    return Image(str(path), width=target_h * width / height, height=target_h)


def _section_table(section: PreviewSection, style_label, style_value) -> Table:
    rows = [[Paragraph(f"<b>{html.escape(section.title)}</b>", style_label), ""]]
    for row in section.rows:
        value = html.escape(row.value).replace("\n", "<br/>")
        rows.append([Paragraph(html.escape(row.label), style_label), Paragraph(value, style_value)])

    table = Table(rows, colWidths=[55 * mm, 115 * mm])
    table.setStyle(TableStyle([
        ("SPAN", (0, 0), (-1, 0)),
        ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    return table


def build_receipt_pdf(record: ReceiptRecord, logo_path: Optional[Path] = None) -> bytes:
    """
    Render a receipt to A4 PDF bytes.

    The layout mirrors the on-screen preview: a branded header followed by
    one bordered table per section.

    Args:
        record: Assembled receipt
        logo_path: Optional image for the header (defaults to ``config.receipt_logo_path``)

    Returns:
        PDF document bytes
    """
    logo = _load_logo(logo_path or config.receipt_logo_path)

    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=18 * mm,
        rightMargin=18 * mm,
        topMargin=14 * mm,
        bottomMargin=14 * mm,
        title=record.receiptNo,
        author=config.company_name,
        subject="Payment receipt",
    )
    styles = getSampleStyleSheet()
    style_n = styles["Normal"]
    style_n.leading = 13
    style_right = ParagraphStyle("right", parent=style_n, alignment=TA_RIGHT)
    style_title = styles["Heading2"]

    brand = [
        Paragraph(f"<b>{html.escape(config.company_name)}</b>", style_title),
        Paragraph(html.escape(config.company_tagline), style_n),
    ]
    header_cells = [[logo, brand, Paragraph("<b>Payment Receipt</b>", style_right)]] if logo else [
        [brand, Paragraph("<b>Payment Receipt</b>", style_right)]
    ]
    widths = [20 * mm, 100 * mm, 50 * mm] if logo else [120 * mm, 50 * mm]
    header = Table(header_cells, colWidths=widths)
    header.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "MIDDLE")]))

    story: List = [header, Spacer(1, 6)]
    for section in build_preview(record, currency_symbol=PDF_CURRENCY):
        story.append(_section_table(section, style_n, style_n))
        story.append(Spacer(1, 5))
    story.append(Spacer(1, 6))
    story.append(Paragraph(html.escape(THANK_YOU_NOTE), style_n))

    doc.build(story)
    data = buf.getvalue()
    log.debug(f"Rendered PDF for {record.receiptNo}: {len(data)} bytes")
    return data


def pdf_filename(record: ReceiptRecord) -> str:
    return f"{record.receiptNo}.pdf" if record.receiptNo else "receipt.pdf"
