from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from invoicing.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)

    # Relationship
    tenant = relationship("Tenant", backref="users")
