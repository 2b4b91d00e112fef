from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from invoicing.db.base import Base


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("people.id"), nullable=False)

    # Relationships
    company = relationship("Company")
