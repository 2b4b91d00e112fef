from decimal import Decimal

from sqlalchemy import Column, Integer, String, Date, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from invoicing.core.config import settings
from invoicing.db.base import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    state = Column(String(20), nullable=False)
    value_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    duration_from = Column(Date, nullable=True)
    duration_to = Column(Date, nullable=True)
    text = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    company_id = Column(Integer, ForeignKey("people.id"), nullable=False)
    customer_id = Column(Integer, ForeignKey("people.id"), nullable=False)

    # Relationships
    company = relationship("Person", foreign_keys=[company_id])
    customer = relationship("Person", foreign_keys=[customer_id])
    line_items = relationship(
        "LineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="LineItem.id",
    )

    __table_args__ = {"sqlite_autoincrement": True}
    __mapper_args__ = {"polymorphic_on": type, "polymorphic_identity": "invoice"}

    def __str__(self) -> str:
        amount = self.amount if self.amount is not None else Decimal("0")
        return f"{self.title} for {self.customer} at {settings.currency} {amount:,.2f}"


class DebitInvoice(Invoice):
    __mapper_args__ = {"polymorphic_identity": "debit"}


class CreditInvoice(Invoice):
    __mapper_args__ = {"polymorphic_identity": "credit"}
