from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Customer(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    street: str | None = None
    zip_code: str | None = None
    city: str | None = None
    email: str | None = None


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    street: str | None = Field(None, max_length=255)
    zip_code: str | None = Field(None, max_length=20)
    city: str | None = Field(None, max_length=255)
    email: EmailStr | None = None


class CustomerUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    street: str | None = Field(None, max_length=255)
    zip_code: str | None = Field(None, max_length=20)
    city: str | None = Field(None, max_length=255)
    email: EmailStr | None = None
