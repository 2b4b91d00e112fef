"""Render debit invoices as PDF documents."""

import io
import logging
import re
from decimal import Decimal

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas
from sqlalchemy.orm import Session

import invoicing.repositories.account as account_repo
from invoicing.core.config import settings
from invoicing.db.models.account import Account as AccountModel
from invoicing.db.models.invoice import DebitInvoice as DebitInvoiceModel
from invoicing.db.models.invoice import Invoice as InvoiceModel
from invoicing.errors import NotFoundError
from invoicing.services.invoice import get_invoice

logger = logging.getLogger(__name__)

PAYMENT_ACCOUNT_TAG = "invoice:payment"

W, H = A4
MARGIN = 50
CONTENT_W = W - 2 * MARGIN
LINE = 14

INK = HexColor("#1F2933")
MUTED = HexColor("#64748B")
RULE = HexColor("#CBD5E1")

# Column x positions for the line-item table: title, times, unit, price, amount
COLUMNS = (MARGIN, MARGIN + 260, MARGIN + 310, MARGIN + 350, W - MARGIN)
TITLE_WIDTH = 210


def format_currency(amount: Decimal | float | None) -> str:
    value = Decimal(str(amount)) if amount is not None else Decimal("0")
    return f"{settings.currency} {value:,.2f}"


def _format_number(value: Decimal | float | None) -> str:
    value = Decimal(str(value)) if value is not None else Decimal("0")
    return f"{value.normalize():f}"


def pdf_filename(invoice: InvoiceModel) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "-", invoice.title or "").strip("-").lower()
    return f"invoice-{invoice.id}-{slug}.pdf" if slug else f"invoice-{invoice.id}.pdf"


class InvoiceDocument:
    """Draws a single invoice onto an A4 canvas."""

    def __init__(
        self,
        invoice: InvoiceModel,
        payment_account: AccountModel | None = None,
        compress: bool = True,
    ):
        self.invoice = invoice
        self.payment_account = payment_account
        self.buffer = io.BytesIO()
        self.c = canvas.Canvas(self.buffer, pagesize=A4, pageCompression=int(compress))
        self.c.setTitle(str(invoice))
        self.c.setAuthor(str(invoice.company))
        self.y = H - MARGIN

    def render(self) -> bytes:
        self.draw_header()
        self.draw_summary()
        self.draw_line_items()
        self.draw_text()
        self.draw_payment_details()
        self.c.showPage()
        self.c.save()
        return self.buffer.getvalue()

    # ─── layout helpers ───

    def ensure_space(self, needed: float):
        if self.y - needed < MARGIN:
            self.c.showPage()
            self.y = H - MARGIN

    def write(self, text: str, x: float = MARGIN, font: str = "Helvetica", size: int = 10, color=INK):
        self.ensure_space(LINE)
        self.c.setFont(font, size)
        self.c.setFillColor(color)
        self.c.drawString(x, self.y, text)
        self.y -= LINE

    def rule(self):
        self.c.setStrokeColor(RULE)
        self.c.setLineWidth(0.5)
        self.c.line(MARGIN, self.y + LINE / 2, W - MARGIN, self.y + LINE / 2)

    # ─── sections ───

    def draw_header(self):
        company = self.invoice.company
        customer = self.invoice.customer
        self.write(str(company), font="Helvetica-Bold", size=14)
        self.y -= LINE

        self.write(customer.name, font="Helvetica-Bold")
        if customer.street:
            self.write(customer.street)
        locality = " ".join(part for part in (customer.zip_code, customer.city) if part)
        if locality:
            self.write(locality)
        self.y -= LINE

    def draw_summary(self):
        invoice = self.invoice
        self.write(invoice.title, font="Helvetica-Bold", size=12)
        self.write(f"Date: {invoice.value_date:%d.%m.%Y}", color=MUTED)
        self.write(f"Due: {invoice.due_date:%d.%m.%Y}", color=MUTED)
        if invoice.duration_from and invoice.duration_to:
            self.write(
                f"Period: {invoice.duration_from:%d.%m.%Y} - {invoice.duration_to:%d.%m.%Y}",
                color=MUTED,
            )
        self.y -= LINE

    def draw_line_items(self):
        title_x, times_x, unit_x, price_x, amount_x = COLUMNS
        self.ensure_space(LINE * 2)
        self.c.setFont("Helvetica-Bold", 10)
        self.c.setFillColor(INK)
        self.c.drawString(title_x, self.y, "Description")
        self.c.drawRightString(times_x, self.y, "Qty")
        self.c.drawString(unit_x, self.y, "Unit")
        self.c.drawRightString(price_x + 70, self.y, "Price")
        self.c.drawRightString(amount_x, self.y, "Amount")
        self.y -= LINE
        self.rule()

        self.c.setFont("Helvetica", 10)
        for line_item in self.invoice.line_items:
            title_lines = simpleSplit(line_item.title, "Helvetica", 10, TITLE_WIDTH) or [""]
            self.ensure_space(LINE * len(title_lines))
            self.c.setFont("Helvetica", 10)
            self.c.setFillColor(INK)
            self.c.drawRightString(times_x, self.y, _format_number(line_item.times))
            self.c.drawString(unit_x, self.y, line_item.quantity)
            self.c.drawRightString(price_x + 70, self.y, format_currency(line_item.price))
            self.c.drawRightString(amount_x, self.y, format_currency(line_item.amount))
            # Long titles wrap onto further lines within the description column
            for text in title_lines:
                self.c.drawString(title_x, self.y, text)
                self.y -= LINE

        self.rule()
        self.c.setFont("Helvetica-Bold", 10)
        self.c.drawString(title_x, self.y, "Total")
        self.c.drawRightString(amount_x, self.y, format_currency(self.invoice.amount))
        self.y -= LINE * 2

    def draw_text(self):
        if not self.invoice.text:
            return
        for paragraph in self.invoice.text.splitlines():
            self.write(paragraph)
        self.y -= LINE

    def draw_payment_details(self):
        account = self.payment_account
        if account is None:
            return
        self.write("Payment details", font="Helvetica-Bold")
        self.write(account.title)
        if account.iban:
            self.write(f"IBAN: {account.iban}")
        self.write(f"Payable by {self.invoice.due_date:%d.%m.%Y}", color=MUTED)


def render_invoice_pdf(
    invoice: InvoiceModel,
    payment_account: AccountModel | None = None,
    compress: bool = True,
) -> bytes:
    """Render the invoice; compress=False leaves page streams readable as plain text."""
    return InvoiceDocument(invoice, payment_account, compress=compress).render()


def get_invoice_pdf(db: Session, invoice_id: int) -> tuple[bytes, str]:
    """
    Render an invoice as PDF.

    Only debit invoices (issued by the tenant's company) have a printable
    document. Payment details come from the account tagged "invoice:payment",
    when one exists.

    Returns:
        Tuple of (PDF bytes, filename)

    Raises:
        NotFoundError: If invoice doesn't exist or is not a debit invoice
    """
    invoice = get_invoice(db, invoice_id)
    if not isinstance(invoice, DebitInvoiceModel):
        raise NotFoundError("No PDF available for this invoice")

    payment_account = account_repo.get_account_by_tag(db, PAYMENT_ACCOUNT_TAG)
    if payment_account is None:
        logger.warning(
            "No account tagged %r, rendering invoice %s without payment details",
            PAYMENT_ACCOUNT_TAG,
            invoice.id,
        )

    return render_invoice_pdf(invoice, payment_account), pdf_filename(invoice)
