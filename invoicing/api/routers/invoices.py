from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from invoicing.api.deps import get_db, get_current_tenant, get_current_user
from invoicing.db.models.tenant import Tenant
from invoicing.db.models.user import User
from invoicing.schemas.invoice import Invoice, InvoiceCreate, InvoiceType, InvoiceUpdate
from invoicing.services.invoice import (
    create_invoice,
    delete_invoice,
    get_invoice,
    list_invoices,
    update_invoice,
)
from invoicing.services.invoice_pdf import get_invoice_pdf

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=list[Invoice])
def get_all_invoices(
    type: InvoiceType | None = Query(None, description="Filter by invoice type (debit or credit)"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get all invoices, ordered by value date.
    """
    invoices = list_invoices(db, invoice_type=type)
    return [Invoice.model_validate(invoice) for invoice in invoices]


@router.post("", response_model=Invoice, status_code=status.HTTP_201_CREATED)
def create_new_invoice(
    invoice_data: InvoiceCreate,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
):
    """
    Create a new invoice with its line items.

    - type "debit": the tenant's company bills the person given by address_id
    - type "credit": the person given by address_id bills the tenant's company

    Line items reference accounts by code.
    """
    invoice = create_invoice(db, tenant, invoice_data)
    return Invoice.model_validate(invoice)


@router.get("/{invoice_id}", response_model=Invoice)
def get_invoice_by_id(
    invoice_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get an invoice by ID.
    """
    return Invoice.model_validate(get_invoice(db, invoice_id))


@router.get(
    "/{invoice_id}/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
def get_invoice_pdf_by_id(
    invoice_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Download a debit invoice as PDF. Credit invoices have no document (404).
    """
    content, filename = get_invoice_pdf(db, invoice_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.put("/{invoice_id}", response_model=Invoice)
def update_invoice_by_id(
    invoice_id: int,
    invoice_data: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an invoice.

    Line items are reconciled against the submitted list: items whose id
    matches are updated, items without a matching id are created and items
    missing from the list are deleted. Omit line_items to leave them as they are.

    address_id and type are ignored: company, customer and invoice type
    cannot change after creation.
    """
    invoice = update_invoice(db, invoice_id, invoice_data)
    return Invoice.model_validate(invoice)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice_by_id(
    invoice_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete an invoice and its line items.
    """
    delete_invoice(db, invoice_id)
