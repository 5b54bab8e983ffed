"""PDF rendering for quotations and invoices.

Both layouts are drawn with the reportlab canvas API. Canvases are created
with ``invariant=1`` so the same record always yields the same bytes, and with
page compression off so the text stays readable in the raw content stream.
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Final

from reportlab.lib.colors import Color, HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from boomav.models import Invoice, PaymentStatus, Quotation
from boomav.services.invoice_service import InvoiceContext
from boomav.services.money import format_kes, format_plain_kes, line_total, to_money

CHUNK_SIZE: Final = 64 * 1024

W, H = A4
MARGIN: Final = 40
CONTENT_W: Final = W - 2 * MARGIN
BOTTOM: Final = MARGIN + 30

NAVY = HexColor("#0B1F4B")
BRAND = HexColor("#0B5FFF")
GOLD = HexColor("#FFD43B")
CHARCOAL = HexColor("#2D3748")
SLATE = HexColor("#64748B")
ROW_SHADE = HexColor("#F1F5F9")
WHITE = HexColor("#FFFFFF")

STATUS_COLORS: Final[dict[PaymentStatus, Color]] = {
    PaymentStatus.PENDING: HexColor("#D97706"),
    PaymentStatus.PAID: HexColor("#16A34A"),
    PaymentStatus.OVERDUE: HexColor("#DC2626"),
}

COMPANY_NAME: Final = "BOOM AUDIO VISUALS"
COMPANY_TAGLINE: Final = "Sound | Lighting | Staging | Event Production"
COMPANY_LINES: Final = (
    "Kisumu, Kenya",
    "Tel: +254 742 412650",
    "Email: boomaudiovisuals254@gmail.com",
    "www.boomaudiovisuals.co.ke",
)
PAYMENT_INSTRUCTIONS: Final = (
    "M-Pesa Paybill: 247247",
    "Account Number: 0742412650",
    "Bank: Equity Bank Kenya, Kisumu Branch",
    "Account Name: Boom Audio Visuals",
    "Account No: 1180281234567",
    "Please quote the invoice number as the payment reference.",
)
TERMS: Final = (
    "1. Payment is due by the due date shown above, or upon receipt if none is given.",
    "2. A 50% deposit confirms the booking; the balance is due before the event date.",
    "3. Equipment damaged through client negligence will be charged at replacement cost.",
    "4. Cancellations within 7 days of the event forfeit the deposit.",
)
PLACEHOLDER_CLIENT: Final = "Valued Client"


@dataclass(slots=True, frozen=True)
class RenderedDocument:
    """A finished PDF and its suggested download name."""

    filename: str
    content: bytes
    media_type: str = "application/pdf"

    def iter_chunks(self, size: int = CHUNK_SIZE) -> Iterator[bytes]:
        for start in range(0, len(self.content), size):
            yield self.content[start : start + size]


def _new_canvas(buffer: io.BytesIO, *, title: str) -> canvas.Canvas:
    pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1, pageCompression=0)
    pdf.setTitle(title)
    pdf.setAuthor("Boom Audio Visuals")
    pdf.setCreator("boomav")
    return pdf


def _format_date(value: datetime | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%d %b %Y")
    return str(value)


class _Writer:
    """Top-down cursor over a canvas with automatic page breaks."""

    def __init__(self, pdf: canvas.Canvas) -> None:
        self.c = pdf
        self.y = H - MARGIN
        self.page = 1

    def ensure(self, height: float) -> None:
        if self.y - height < BOTTOM:
            self.new_page()

    def new_page(self) -> None:
        self.footer()
        self.c.showPage()
        self.page += 1
        self.y = H - MARGIN

    def footer(self) -> None:
        self.c.saveState()
        self.c.setFont("Helvetica", 8)
        self.c.setFillColor(SLATE)
        self.c.drawCentredString(W / 2, MARGIN - 10, f"Page {self.page}")
        self.c.restoreState()

    def text(
        self,
        value: str,
        *,
        font: str = "Helvetica",
        size: float = 10,
        indent: float = 0,
        leading: float | None = None,
        color: Color = CHARCOAL,
    ) -> None:
        leading = leading or size * 1.4
        lines = simpleSplit(value, font, size, CONTENT_W - indent) or [""]
        for line in lines:
            self.ensure(leading)
            self.c.setFont(font, size)
            self.c.setFillColor(color)
            self.c.drawString(MARGIN + indent, self.y - size, line)
            self.y -= leading

    def gap(self, height: float = 8) -> None:
        self.y -= height


def render_quotation_pdf(quotation: Quotation) -> RenderedDocument:
    """Render the plain quotation layout."""

    buffer = io.BytesIO()
    pdf = _new_canvas(buffer, title=f"Quotation {quotation.id}")
    w = _Writer(pdf)

    w.text("Quotation", font="Helvetica-Bold", size=20)
    w.gap(4)
    w.text(f"Quotation ID: {quotation.id}")
    w.text(f"Date: {_format_date(quotation.created_at)}")
    if quotation.client_email:
        w.text(f"Client: {quotation.client_email}")
    w.gap(10)

    w.text("Items", font="Helvetica-Bold", size=12)
    for index, item in enumerate(quotation.line_items, start=1):
        description = item.get("description") or "Service"
        quantity = item.get("quantity", 0)
        w.text(f"{index}. {description}", font="Helvetica-Bold")
        w.text(
            f"Qty: {quantity}    Unit price: {format_plain_kes(item.get('unitPrice'))}"
            f"    Line total: {format_plain_kes(line_total(item))}",
            indent=14,
        )
    w.gap(10)

    w.text(f"Subtotal: {format_plain_kes(quotation.subtotal)}")
    w.text(f"VAT (16%): {format_plain_kes(quotation.tax)}")
    w.text(f"Discount: {format_plain_kes(quotation.discount)}")
    w.text(f"Total: {format_plain_kes(quotation.total)}", font="Helvetica-Bold", size=12)

    if quotation.notes:
        w.gap(10)
        w.text("Notes", font="Helvetica-Bold", size=12)
        w.text(quotation.notes)

    w.footer()
    pdf.save()
    return RenderedDocument(
        filename=f"quotation-{quotation.id}.pdf", content=buffer.getvalue()
    )


_TABLE_COLUMNS: Final = (
    # (title, x offset, width, align)
    ("#", 0, 24, "left"),
    ("DESCRIPTION", 24, 255, "left"),
    ("QTY", 279, 50, "right"),
    ("UNIT PRICE", 329, 93, "right"),
    ("AMOUNT", 422, CONTENT_W - 422, "right"),
)
_ROW_H: Final = 20


def _draw_cell(pdf: canvas.Canvas, value: str, column: tuple[str, int, float, str], y: float) -> None:
    _, offset, width, align = column
    if align == "right":
        pdf.drawRightString(MARGIN + offset + width - 6, y, value)
    else:
        pdf.drawString(MARGIN + offset + 6, y, value)


def _draw_table_header(w: _Writer) -> None:
    pdf = w.c
    pdf.saveState()
    pdf.setFillColor(NAVY)
    pdf.rect(MARGIN, w.y - _ROW_H, CONTENT_W, _ROW_H, fill=1, stroke=0)
    pdf.setFillColor(WHITE)
    pdf.setFont("Helvetica-Bold", 9)
    for column in _TABLE_COLUMNS:
        _draw_cell(pdf, column[0], column, w.y - 14)
    pdf.restoreState()
    w.y -= _ROW_H


def _draw_letterhead(w: _Writer, invoice: Invoice) -> None:
    pdf = w.c
    band_h = 96
    pdf.saveState()
    pdf.setFillColor(NAVY)
    pdf.rect(0, H - band_h, W, band_h, fill=1, stroke=0)
    pdf.setFillColor(GOLD)
    pdf.rect(0, H - band_h - 4, W, 4, fill=1, stroke=0)

    pdf.setFillColor(WHITE)
    pdf.setFont("Helvetica-Bold", 20)
    pdf.drawString(MARGIN, H - 38, COMPANY_NAME)
    pdf.setFont("Helvetica", 8.5)
    pdf.drawString(MARGIN, H - 52, COMPANY_TAGLINE)
    y = H - 66
    for line in COMPANY_LINES[:2]:
        pdf.drawString(MARGIN, y, line)
        y -= 11
    y = H - 66
    for line in COMPANY_LINES[2:]:
        pdf.drawRightString(W - MARGIN, y, line)
        y -= 11

    pdf.setFont("Helvetica-Bold", 26)
    pdf.drawRightString(W - MARGIN, H - 40, "INVOICE")
    pdf.setFont("Helvetica", 10)
    pdf.drawRightString(W - MARGIN, H - 54, invoice.number)
    pdf.restoreState()
    w.y = H - band_h - 24


def _draw_status_label(w: _Writer, status: PaymentStatus) -> None:
    pdf = w.c
    label = status.value.upper()
    width = pdf.stringWidth(label, "Helvetica-Bold", 9) + 16
    x = W - MARGIN - width
    pdf.saveState()
    pdf.setFillColor(STATUS_COLORS.get(status, SLATE))
    pdf.roundRect(x, w.y - 16, width, 16, 4, fill=1, stroke=0)
    pdf.setFillColor(WHITE)
    pdf.setFont("Helvetica-Bold", 9)
    pdf.drawCentredString(x + width / 2, w.y - 11.5, label)
    pdf.restoreState()


def _draw_meta(w: _Writer, invoice: Invoice) -> None:
    _draw_status_label(w, invoice.payment_status)
    w.text(f"Invoice Number: {invoice.number}", font="Helvetica-Bold")
    w.text(f"Issue Date: {_format_date(invoice.created_at)}")
    if invoice.due_date:
        w.text(f"Due Date: {_format_date(invoice.due_date)}")
    w.text(f"Payment Status: {invoice.payment_status.value.capitalize()}")
    w.gap(10)


def _section_title(w: _Writer, title: str) -> None:
    w.ensure(40)
    w.text(title, font="Helvetica-Bold", size=10, color=BRAND)
    w.c.saveState()
    w.c.setStrokeColor(GOLD)
    w.c.setLineWidth(1)
    w.c.line(MARGIN, w.y + 2, MARGIN + 120, w.y + 2)
    w.c.restoreState()
    w.gap(4)


def _draw_bill_to(w: _Writer, context: InvoiceContext) -> None:
    _section_title(w, "BILL TO")
    request = context.request
    if request is None:
        w.text(PLACEHOLDER_CLIENT, font="Helvetica-Bold", size=11)
    else:
        w.text(request.full_name or PLACEHOLDER_CLIENT, font="Helvetica-Bold", size=11)
        if request.company:
            w.text(request.company)
        w.text(request.email)
        w.text(request.phone)
    w.gap(10)


def _draw_event_details(w: _Writer, context: InvoiceContext) -> None:
    request = context.request
    if request is None or not (request.event_date or request.venue):
        return
    _section_title(w, "EVENT DETAILS")
    if request.event_date:
        when = request.event_date
        if request.event_time:
            when = f"{when} at {request.event_time}"
        w.text(f"Date: {when}")
    if request.venue:
        place = ", ".join(part for part in (request.venue, request.city) if part)
        w.text(f"Venue: {place}")
    w.gap(10)


def _draw_line_items(w: _Writer, quotation: Quotation) -> None:
    _section_title(w, "SERVICES")
    w.ensure(_ROW_H * 2)
    _draw_table_header(w)
    pdf = w.c
    for index, item in enumerate(quotation.line_items, start=1):
        if w.y - _ROW_H < BOTTOM:
            w.new_page()
            _draw_table_header(w)
        description = item.get("description") or "Service"
        description = simpleSplit(description, "Helvetica", 9, 240)[0] if description else ""
        pdf.saveState()
        if index % 2 == 0:
            pdf.setFillColor(ROW_SHADE)
            pdf.rect(MARGIN, w.y - _ROW_H, CONTENT_W, _ROW_H, fill=1, stroke=0)
        pdf.setFillColor(CHARCOAL)
        pdf.setFont("Helvetica", 9)
        values = (
            str(index),
            description,
            str(item.get("quantity", 0)),
            format_kes(to_money(item.get("unitPrice"))),
            format_kes(line_total(item)),
        )
        for value, column in zip(values, _TABLE_COLUMNS):
            _draw_cell(pdf, value, column, w.y - 14)
        pdf.restoreState()
        w.y -= _ROW_H
    w.gap(12)


def _draw_amount_due(w: _Writer, invoice: Invoice) -> None:
    w.ensure(44)
    pdf = w.c
    box_w = 230
    x = W - MARGIN - box_w
    pdf.saveState()
    pdf.setFillColor(NAVY)
    pdf.rect(x, w.y - 34, box_w, 34, fill=1, stroke=0)
    pdf.setFillColor(GOLD)
    pdf.setFont("Helvetica-Bold", 10)
    pdf.drawString(x + 10, w.y - 21, "AMOUNT DUE")
    pdf.setFillColor(WHITE)
    pdf.setFont("Helvetica-Bold", 13)
    pdf.drawRightString(W - MARGIN - 10, w.y - 22, format_kes(invoice.amount))
    pdf.restoreState()
    w.y -= 50


def _draw_static_block(w: _Writer, title: str, lines: tuple[str, ...], size: float = 9) -> None:
    _section_title(w, title)
    for line in lines:
        w.text(line, size=size)
    w.gap(10)


def render_invoice_pdf(invoice: Invoice, context: InvoiceContext) -> RenderedDocument:
    """Render the styled invoice layout.

    Client identity and line items come from ``context``, which is resolved
    by walking Invoice -> Quotation -> ServiceRequest at request time. Any
    missing link drops its section; the amount due always comes from the
    invoice itself.
    """

    buffer = io.BytesIO()
    pdf = _new_canvas(buffer, title=f"Invoice {invoice.number}")
    w = _Writer(pdf)

    _draw_letterhead(w, invoice)
    _draw_meta(w, invoice)
    _draw_bill_to(w, context)
    _draw_event_details(w, context)
    if context.quotation is not None and context.quotation.line_items:
        _draw_line_items(w, context.quotation)
    _draw_amount_due(w, invoice)
    _draw_static_block(w, "PAYMENT INSTRUCTIONS", PAYMENT_INSTRUCTIONS)
    _draw_static_block(w, "TERMS & CONDITIONS", TERMS, size=8)
    w.text("Thank you for your business!", font="Helvetica-Oblique", size=9, color=SLATE)

    w.footer()
    pdf.save()
    return RenderedDocument(
        filename=f"Boom-Invoice-{invoice.id}.pdf", content=buffer.getvalue()
    )
