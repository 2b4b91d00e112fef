from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invoicing.api.deps import get_db, get_current_user
from invoicing.db.models.user import User
import invoicing.repositories.person as person_repo
from invoicing.services.customer import delete_customer, get_customer, update_customer
from invoicing.schemas.customer import Customer, CustomerCreate, CustomerUpdate

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
def create_new_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a new customer.
    """
    customer = person_repo.create_customer(
        db,
        name=customer_data.name,
        street=customer_data.street,
        zip_code=customer_data.zip_code,
        city=customer_data.city,
        email=customer_data.email,
    )
    return Customer.model_validate(customer)


@router.get("", response_model=list[Customer])
def get_all_customers(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get all customers, sorted by name.
    """
    customers = person_repo.get_all_customers(db)
    return [Customer.model_validate(customer) for customer in customers]


@router.get("/{customer_id}", response_model=Customer)
def get_customer_by_id(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return Customer.model_validate(get_customer(db, customer_id))


@router.put("/{customer_id}", response_model=Customer)
def update_customer_by_id(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update a customer.

    Fields not included in the request are not updated.
    To clear an optional field (set to null), explicitly include it with null value.
    """
    update_data = customer_data.model_dump(exclude_unset=True)
    customer = update_customer(db, customer_id=customer_id, **update_data)
    return Customer.model_validate(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer_by_id(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a customer by ID.

    A customer can only be deleted if no invoice references them.
    """
    delete_customer(db, customer_id)
