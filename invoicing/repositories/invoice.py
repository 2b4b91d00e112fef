from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from invoicing.db.models.invoice import Invoice as InvoiceModel
from invoicing.db.models.line_item import LineItem as LineItemModel


def _with_line_items(query):
    return query.options(
        selectinload(InvoiceModel.line_items).joinedload(LineItemModel.credit_account),
        selectinload(InvoiceModel.line_items).joinedload(LineItemModel.debit_account),
    )


def get_invoice_by_id(db: Session, invoice_id: int) -> InvoiceModel | None:
    """Get an invoice by ID with its line items and their accounts loaded."""
    return (
        _with_line_items(db.query(InvoiceModel))
        .filter(InvoiceModel.id == invoice_id)
        .first()
    )


def get_all_invoices(db: Session, invoice_type: str | None = None) -> list[InvoiceModel]:
    """Get all invoices, optionally filtered by subtype ("debit" or "credit")."""
    query = _with_line_items(db.query(InvoiceModel))
    if invoice_type is not None:
        query = query.filter(InvoiceModel.type == invoice_type)
    return query.order_by(InvoiceModel.value_date, InvoiceModel.id).all()


def count_invoices_for_person(db: Session, person_id: int) -> int:
    """Count invoices where the person is either the company or the customer."""
    return (
        db.query(InvoiceModel)
        .filter(
            or_(
                InvoiceModel.company_id == person_id,
                InvoiceModel.customer_id == person_id,
            )
        )
        .count()
    )


def create_invoice(db: Session, invoice_class: type[InvoiceModel], **fields) -> InvoiceModel:
    """
    Stage a new invoice of the given subtype in the session.

    The invoice is flushed (so it has an ID) but not committed; the caller
    owns the transaction.
    """
    db_invoice = invoice_class(**fields)
    db.add(db_invoice)
    db.flush()
    return db_invoice


def update_invoice(db: Session, invoice: InvoiceModel, **kwargs) -> InvoiceModel:
    """
    Stage changes to the mutable invoice fields. Only provided fields are updated.

    The caller owns the transaction.
    """
    for field in (
        "title",
        "state",
        "value_date",
        "due_date",
        "duration_from",
        "duration_to",
        "text",
        "remarks",
        "amount",
    ):
        if field in kwargs:
            setattr(invoice, field, kwargs[field])

    db.flush()
    return invoice


def delete_invoice(db: Session, invoice: InvoiceModel) -> None:
    """Delete an invoice and its line items. Pure data access - no business logic."""
    db.delete(invoice)
    db.commit()
