from decimal import Decimal

from sqlalchemy.orm import Session

from invoicing.db.models.account import Account as AccountModel
from invoicing.db.models.invoice import Invoice as InvoiceModel
from invoicing.db.models.line_item import LineItem as LineItemModel


def create_line_item(
    db: Session,
    invoice: InvoiceModel,
    title: str,
    times: Decimal,
    quantity: str,
    price: Decimal,
    credit_account: AccountModel,
    debit_account: AccountModel,
) -> LineItemModel:
    """Stage a new line item on the invoice. The caller owns the transaction."""
    db_line_item = LineItemModel(
        title=title,
        times=times,
        quantity=quantity,
        price=price,
        credit_account=credit_account,
        debit_account=debit_account,
    )
    invoice.line_items.append(db_line_item)
    db.flush()
    return db_line_item


def update_line_item(db: Session, line_item: LineItemModel, **kwargs) -> LineItemModel:
    """Stage changes to a line item. Only provided fields are updated."""
    for field in (
        "title",
        "times",
        "quantity",
        "price",
        "credit_account",
        "debit_account",
    ):
        if field in kwargs:
            setattr(line_item, field, kwargs[field])

    db.flush()
    return line_item


def delete_line_item(db: Session, line_item: LineItemModel) -> None:
    """Stage removal of a line item from its invoice. The caller owns the transaction."""
    line_item.invoice.line_items.remove(line_item)
    db.flush()
