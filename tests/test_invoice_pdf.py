"""Content of rendered invoice documents, read from uncompressed page streams."""

import pytest
from sqlalchemy.orm import Session

from invoicing.services.invoice_pdf import get_invoice_pdf, pdf_filename, render_invoice_pdf


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def payment_account(make_account):
    return make_account(
        "1020", title="Zurich Cantonal Bank", tags=["invoice:payment"], iban="CH93 0076 2011 6238 5295 7"
    )


@pytest.fixture(scope="function")
def invoice(make_account, make_invoice, customer):
    """A debit invoice with a billing period, free text and two line items."""
    make_account("1100")
    make_account("3200")
    line_item = {"quantity": "x", "credit_account_code": "1100", "debit_account_code": "3200"}
    return make_invoice(
        customer,
        title="Hosting October",
        value_date="2015-10-01",
        due_date="2015-10-10",
        duration_from="2015-09-01",
        duration_to="2015-09-30",
        text="Thank you for your money",
        line_items=[
            {**line_item, "title": "SWAG subscription FULL", "times": 5, "price": "42.00"},
            {**line_item, "title": "New Item", "times": 2, "price": "1337.00"},
        ],
    )


# ============================================================================
# DOCUMENT CONTENT TESTS
# ============================================================================


def test_pdf_contains_parties(invoice):
    """Test the issuing company and the customer address are printed."""
    pdf = render_invoice_pdf(invoice, compress=False)
    assert b"Test Company AG" in pdf
    assert b"Banana Republic GmbH" in pdf
    assert b"Hauptstrasse 1" in pdf


def test_pdf_contains_summary(invoice):
    """Test title, dates and billing period are printed."""
    pdf = render_invoice_pdf(invoice, compress=False)
    assert b"Hosting October" in pdf
    assert b"Date: 01.10.2015" in pdf
    assert b"Due: 10.10.2015" in pdf
    assert b"Period: 01.09.2015 - 30.09.2015" in pdf


def test_pdf_without_period(make_invoice, customer):
    pdf = render_invoice_pdf(make_invoice(customer), compress=False)
    assert b"Period:" not in pdf


def test_pdf_contains_line_items_and_total(invoice):
    """Test every line item and the invoice total are printed."""
    pdf = render_invoice_pdf(invoice, compress=False)
    assert b"Description" in pdf
    assert b"SWAG subscription FULL" in pdf
    assert b"New Item" in pdf
    assert b"CHF 210.00" in pdf
    assert b"CHF 2,674.00" in pdf
    assert b"Total" in pdf
    assert b"CHF 2,884.00" in pdf


def test_pdf_contains_text(invoice):
    pdf = render_invoice_pdf(invoice, compress=False)
    assert b"Thank you for your money" in pdf


def test_pdf_wraps_long_line_item_titles(make_account, make_invoice, customer):
    """Test a long title is printed in full over several lines."""
    make_account("1100")
    make_account("3200")
    title = (
        "Monthly retainer for backend development, code review "
        "and on-call support during September"
    )
    invoice = make_invoice(
        customer,
        line_items=[
            {
                "title": title,
                "times": 1,
                "price": "500",
                "credit_account_code": "1100",
                "debit_account_code": "3200",
            }
        ],
    )
    pdf = render_invoice_pdf(invoice, compress=False)
    assert b"Monthly retainer" in pdf
    assert b"September" in pdf
    assert title.encode() not in pdf


def test_pdf_contains_payment_details(invoice, payment_account):
    """Test the payment account is printed when it exists."""
    pdf = render_invoice_pdf(invoice, payment_account, compress=False)
    assert b"Payment details" in pdf
    assert b"Zurich Cantonal Bank" in pdf
    assert b"IBAN: CH93 0076 2011 6238 5295 7" in pdf
    assert b"Payable by 10.10.2015" in pdf


def test_pdf_without_payment_account(invoice):
    """Test no payment section is printed without a payment account."""
    pdf = render_invoice_pdf(invoice, compress=False)
    assert b"Payment details" not in pdf
    assert b"IBAN" not in pdf


def test_pdf_is_compressed_by_default(invoice):
    pdf = render_invoice_pdf(invoice)
    assert pdf.startswith(b"%PDF")
    assert b"SWAG subscription FULL" not in pdf


# ============================================================================
# SERVICE TESTS
# ============================================================================


def test_get_invoice_pdf_filename(db: Session, invoice):
    content, filename = get_invoice_pdf(db, invoice.id)
    assert content.startswith(b"%PDF")
    assert filename == f"invoice-{invoice.id}-hosting-october.pdf"
    assert filename == pdf_filename(invoice)
