import logging
from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy.orm import Session

import invoicing.repositories.account as account_repo
import invoicing.repositories.invoice as invoice_repo
import invoicing.repositories.line_item as line_item_repo
import invoicing.repositories.person as person_repo
from invoicing.db.models.account import Account as AccountModel
from invoicing.db.models.invoice import (
    CreditInvoice as CreditInvoiceModel,
    DebitInvoice as DebitInvoiceModel,
    Invoice as InvoiceModel,
)
from invoicing.db.models.tenant import Tenant
from invoicing.domain.line_item_reconciliation import LineItemReconciliation
from invoicing.errors import DomainValidationError, NotFoundError
from invoicing.schemas.invoice import InvoiceCreate, InvoiceUpdate, LineItemIn

logger = logging.getLogger(__name__)

INVOICE_CLASSES: dict[str, type[InvoiceModel]] = {
    "debit": DebitInvoiceModel,
    "credit": CreditInvoiceModel,
}

CENT = Decimal("0.01")


def _resolve_accounts(
    db: Session, descriptors: Iterable[LineItemIn]
) -> dict[str, AccountModel]:
    """
    Resolve every account code referenced by the line items.

    Raises:
        DomainValidationError: If any code doesn't match an account
    """
    codes: set[str] = set()
    for descriptor in descriptors:
        codes.add(descriptor.credit_account_code)
        codes.add(descriptor.debit_account_code)

    accounts = account_repo.get_accounts_by_codes(db, codes)
    missing = sorted(codes - accounts.keys())
    if missing:
        raise DomainValidationError(f"Unknown account code(s): {', '.join(missing)}")
    return accounts


def _line_item_fields(
    descriptor: LineItemIn, accounts: dict[str, AccountModel]
) -> dict:
    return {
        "title": descriptor.title,
        "times": descriptor.times,
        "quantity": descriptor.quantity,
        "price": descriptor.price,
        "credit_account": accounts[descriptor.credit_account_code],
        "debit_account": accounts[descriptor.debit_account_code],
    }


def _total_amount(invoice: InvoiceModel) -> Decimal:
    total = sum((line_item.amount for line_item in invoice.line_items), Decimal("0"))
    return total.quantize(CENT)


def _reconcile_line_items(
    db: Session,
    invoice: InvoiceModel,
    descriptors: list[LineItemIn],
    accounts: dict[str, AccountModel],
) -> LineItemReconciliation:
    existing = {line_item.id: line_item for line_item in invoice.line_items}
    plan = LineItemReconciliation.plan(existing.keys(), descriptors)

    for line_item_id in plan.deletes:
        line_item_repo.delete_line_item(db, existing[line_item_id])
    for line_item_id, descriptor in plan.updates:
        line_item_repo.update_line_item(
            db, existing[line_item_id], **_line_item_fields(descriptor, accounts)
        )
    for descriptor in plan.creates:
        line_item_repo.create_line_item(
            db, invoice, **_line_item_fields(descriptor, accounts)
        )

    return plan


def get_invoice(db: Session, invoice_id: int) -> InvoiceModel:
    """
    Get an invoice by ID.

    Raises:
        NotFoundError: If invoice doesn't exist
    """
    invoice = invoice_repo.get_invoice_by_id(db, invoice_id)
    if not invoice:
        raise NotFoundError("Invoice not found")
    return invoice


def list_invoices(db: Session, invoice_type: str | None = None) -> list[InvoiceModel]:
    return invoice_repo.get_all_invoices(db, invoice_type=invoice_type)


def create_invoice(db: Session, tenant: Tenant, invoice_data: InvoiceCreate) -> InvoiceModel:
    """
    Create a debit or credit invoice with its line items.

    - Debit: issued by the tenant's company to the addressed person
    - Credit: issued by the addressed person to the tenant's company
    - Resolves all account codes before writing anything
    - Recomputes the invoice amount from its line items

    Raises:
        NotFoundError: If the addressed person doesn't exist
        DomainValidationError: If a line item references an unknown account code
    """
    address = person_repo.get_person_by_id(db, invoice_data.address_id)
    if not address:
        raise NotFoundError(f"Address with id {invoice_data.address_id} not found")

    accounts = _resolve_accounts(db, invoice_data.line_items)

    own_company = tenant.company
    if invoice_data.type == "debit":
        company, customer = own_company, address
    else:
        company, customer = address, own_company

    try:
        invoice = invoice_repo.create_invoice(
            db,
            INVOICE_CLASSES[invoice_data.type],
            title=invoice_data.title,
            state=invoice_data.state,
            value_date=invoice_data.value_date,
            due_date=invoice_data.due_date,
            duration_from=invoice_data.duration_from,
            duration_to=invoice_data.duration_to,
            text=invoice_data.text,
            remarks=invoice_data.remarks,
            amount=Decimal("0"),
            company_id=company.id,
            customer_id=customer.id,
        )
        for descriptor in invoice_data.line_items:
            line_item_repo.create_line_item(
                db, invoice, **_line_item_fields(descriptor, accounts)
            )
        invoice_repo.update_invoice(db, invoice, amount=_total_amount(invoice))
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(invoice)
    logger.info(
        "Created %s invoice %s with %d line item(s)",
        invoice_data.type,
        invoice.id,
        len(invoice.line_items),
    )
    return invoice


def update_invoice(db: Session, invoice_id: int, invoice_data: InvoiceUpdate) -> InvoiceModel:
    """
    Update an invoice and reconcile its line items.

    - Replaces the mutable invoice fields
    - Ignores address_id and type: company, customer and subtype are fixed at creation
    - When line_items is provided, the invoice ends up with exactly those items:
      matching ids are updated, the rest are created, unreferenced ones are deleted
    - Everything happens in one transaction; any failure leaves the invoice untouched

    Raises:
        NotFoundError: If invoice doesn't exist
        DomainValidationError: If a line item references an unknown account code
    """
    invoice = get_invoice(db, invoice_id)

    if invoice_data.type is not None and invoice_data.type != invoice.type:
        logger.info("Ignoring type change on invoice %s", invoice_id)
    counterparty_id = invoice.customer_id if invoice.type == "debit" else invoice.company_id
    if invoice_data.address_id is not None and invoice_data.address_id != counterparty_id:
        logger.info("Ignoring address change on invoice %s", invoice_id)

    descriptors = invoice_data.line_items
    accounts = _resolve_accounts(db, descriptors or [])

    plan = None
    try:
        invoice_repo.update_invoice(
            db,
            invoice,
            title=invoice_data.title,
            state=invoice_data.state,
            value_date=invoice_data.value_date,
            due_date=invoice_data.due_date,
            duration_from=invoice_data.duration_from,
            duration_to=invoice_data.duration_to,
            text=invoice_data.text,
            remarks=invoice_data.remarks,
        )
        if descriptors is not None:
            plan = _reconcile_line_items(db, invoice, descriptors, accounts)
        invoice_repo.update_invoice(db, invoice, amount=_total_amount(invoice))
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(invoice)
    if plan is not None:
        logger.info(
            "Updated invoice %s: %d line item(s) updated, %d created, %d deleted",
            invoice.id,
            len(plan.updates),
            len(plan.creates),
            len(plan.deletes),
        )
    else:
        logger.info("Updated invoice %s", invoice.id)
    return invoice


def delete_invoice(db: Session, invoice_id: int) -> None:
    """
    Delete an invoice together with its line items.

    Raises:
        NotFoundError: If invoice doesn't exist
    """
    invoice = get_invoice(db, invoice_id)
    invoice_repo.delete_invoice(db, invoice)
    logger.info("Deleted invoice %s", invoice_id)
