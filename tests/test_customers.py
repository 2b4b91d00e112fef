from sqlalchemy.orm import Session

from invoicing.db.models.person import Customer as CustomerModel


# ============================================================================
# CREATE CUSTOMER TESTS
# ============================================================================


def test_create_customer(client, db: Session, auth_headers: dict):
    """Test successful customer creation."""
    response = client.post(
        "/api/v1/customers",
        json={
            "name": "Acme Corp",
            "street": "Bahnhofstrasse 10",
            "zip_code": "8001",
            "city": "Zürich",
            "email": "billing@acme.example.com",
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Acme Corp"
    assert data["city"] == "Zürich"
    assert data["email"] == "billing@acme.example.com"
    assert "id" in data
    assert db.query(CustomerModel).count() == 1


def test_create_customer_name_only(client, auth_headers: dict):
    """Test only the name is required."""
    response = client.post("/api/v1/customers", json={"name": "Walk-in"}, headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["street"] is None


def test_create_customer_missing_name(client, auth_headers: dict):
    """Test customer creation without a name fails."""
    response = client.post("/api/v1/customers", json={"city": "Bern"}, headers=auth_headers)
    assert response.status_code == 422


def test_create_customer_invalid_email(client, auth_headers: dict):
    response = client.post(
        "/api/v1/customers", json={"name": "Acme", "email": "not-an-email"}, headers=auth_headers
    )
    assert response.status_code == 422


def test_create_customer_without_authentication(client):
    """Test customer creation without authentication fails."""
    response = client.post("/api/v1/customers", json={"name": "Acme"})
    assert response.status_code == 401


# ============================================================================
# LIST / GET CUSTOMER TESTS
# ============================================================================


def test_list_customers_sorted_by_name(client, auth_headers: dict, customer):
    """Test customers are listed by name and the tenant company is not included."""
    client.post("/api/v1/customers", json={"name": "Apple Farm"}, headers=auth_headers)
    response = client.get("/api/v1/customers", headers=auth_headers)
    assert response.status_code == 200
    names = [item["name"] for item in response.json()]
    assert names == ["Apple Farm", "Banana Republic GmbH"]


def test_get_customer(client, auth_headers: dict, customer):
    response = client.get(f"/api/v1/customers/{customer.id}", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == customer.id
    assert data["name"] == "Banana Republic GmbH"
    assert data["zip_code"] == "8000"


def test_get_customer_not_found(client, auth_headers: dict):
    """Test getting a non-existent customer."""
    response = client.get("/api/v1/customers/9999", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_get_customer_rejects_company(client, auth_headers: dict, company):
    """Test the tenant's own company is not reachable as a customer."""
    response = client.get(f"/api/v1/customers/{company.id}", headers=auth_headers)
    assert response.status_code == 404


# ============================================================================
# UPDATE CUSTOMER TESTS
# ============================================================================


def test_update_customer_partial(client, db: Session, auth_headers: dict, customer):
    """Test fields not in the request are left alone."""
    response = client.put(
        f"/api/v1/customers/{customer.id}", json={"city": "Basel"}, headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["city"] == "Basel"
    assert data["name"] == "Banana Republic GmbH"
    assert data["street"] == "Hauptstrasse 1"


def test_update_customer_clear_field(client, auth_headers: dict, customer):
    """Test an explicit null clears an optional field."""
    response = client.put(
        f"/api/v1/customers/{customer.id}", json={"street": None}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["street"] is None


def test_update_customer_null_name(client, auth_headers: dict, customer):
    """Test the name cannot be cleared."""
    response = client.put(
        f"/api/v1/customers/{customer.id}", json={"name": None}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_update_customer_not_found(client, auth_headers: dict):
    response = client.put("/api/v1/customers/9999", json={"city": "Basel"}, headers=auth_headers)
    assert response.status_code == 404


# ============================================================================
# DELETE CUSTOMER TESTS
# ============================================================================


def test_delete_customer(client, db: Session, auth_headers: dict, customer):
    """Test deleting a customer without invoices."""
    response = client.delete(f"/api/v1/customers/{customer.id}", headers=auth_headers)
    assert response.status_code == 204
    assert db.query(CustomerModel).count() == 0


def test_delete_customer_with_invoices(
    client, db: Session, auth_headers: dict, customer, make_invoice
):
    """Test a customer referenced by an invoice cannot be deleted."""
    make_invoice(customer)
    response = client.delete(f"/api/v1/customers/{customer.id}", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert db.query(CustomerModel).count() == 1


def test_delete_customer_not_found(client, auth_headers: dict):
    response = client.delete("/api/v1/customers/9999", headers=auth_headers)
    assert response.status_code == 404
