from sqlalchemy.orm import Session

from invoicing.db.models.person import Customer as CustomerModel, Person as PersonModel
from invoicing.errors import NotFoundError


def get_person_by_id(db: Session, person_id: int) -> PersonModel | None:
    """Get a person (company or customer) by ID."""
    return db.query(PersonModel).filter(PersonModel.id == person_id).first()


def get_customer_by_id(db: Session, customer_id: int) -> CustomerModel | None:
    """Get a customer by ID."""
    return db.query(CustomerModel).filter(CustomerModel.id == customer_id).first()


def get_all_customers(db: Session) -> list[CustomerModel]:
    """Get all customers, sorted by name."""
    return db.query(CustomerModel).order_by(CustomerModel.name, CustomerModel.id).all()


def create_customer(
    db: Session,
    name: str,
    street: str | None = None,
    zip_code: str | None = None,
    city: str | None = None,
    email: str | None = None,
) -> CustomerModel:
    """Create a new customer in the database. Pure data access - no business logic."""
    db_customer = CustomerModel(
        name=name,
        street=street,
        zip_code=zip_code,
        city=city,
        email=email,
    )
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


def update_customer(db: Session, customer_id: int, **kwargs) -> CustomerModel:
    """
    Update a customer. Only updates fields that are explicitly provided.

    To clear a field (set to None), explicitly pass it with None value.
    """
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    for field in ("name", "street", "zip_code", "city", "email"):
        if field in kwargs:
            setattr(customer, field, kwargs[field])

    db.commit()
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    """Delete a customer from the database. Pure data access - no business logic."""
    customer = get_customer_by_id(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found")

    db.delete(customer)
    db.commit()
