from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    tenant_id: int


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User
