import logging

from sqlalchemy.orm import Session

import invoicing.repositories.invoice as invoice_repo
import invoicing.repositories.person as person_repo
from invoicing.db.models.person import Customer as CustomerModel
from invoicing.errors import DomainValidationError, NotFoundError

logger = logging.getLogger(__name__)


def get_customer(db: Session, customer_id: int) -> CustomerModel:
    customer = person_repo.get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")
    return customer


def update_customer(db: Session, customer_id: int, **update_fields) -> CustomerModel:
    """
    Update a customer. Only fields explicitly provided are updated.

    Raises:
        NotFoundError: If customer doesn't exist
        DomainValidationError: If name is explicitly cleared
    """
    get_customer(db, customer_id)
    if "name" in update_fields and not update_fields["name"]:
        raise DomainValidationError("Customer name cannot be empty")
    return person_repo.update_customer(db, customer_id=customer_id, **update_fields)


def delete_customer(db: Session, customer_id: int) -> None:
    """
    Delete a customer with business logic validation.

    - Validates customer exists
    - Validates no invoice references the customer

    Raises:
        NotFoundError: If customer doesn't exist
        DomainValidationError: If customer has invoices
    """
    get_customer(db, customer_id)

    if invoice_repo.count_invoices_for_person(db, customer_id):
        raise DomainValidationError(
            "Cannot delete customer: customer has associated invoices"
        )

    person_repo.delete_customer(db, customer_id)
    logger.info("Deleted customer %s", customer_id)
