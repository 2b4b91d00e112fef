from invoicing.db.models.person import Person, Company, Customer
from invoicing.db.models.tenant import Tenant
from invoicing.db.models.user import User
from invoicing.db.models.account import Account
from invoicing.db.models.invoice import Invoice, DebitInvoice, CreditInvoice
from invoicing.db.models.line_item import LineItem

__all__ = [
    "Person",
    "Company",
    "Customer",
    "Tenant",
    "User",
    "Account",
    "Invoice",
    "DebitInvoice",
    "CreditInvoice",
    "LineItem",
]
