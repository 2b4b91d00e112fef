from decimal import Decimal

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from invoicing.db.base import Base


class LineItem(Base):
    __tablename__ = "line_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    times = Column(Numeric(12, 4), nullable=False, default=Decimal("1"))
    quantity = Column(String(20), nullable=False, default="x")
    price = Column(Numeric(12, 2), nullable=False)
    credit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    debit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)

    # Removed ids must never come back on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    # Relationships
    invoice = relationship("Invoice", back_populates="line_items")
    credit_account = relationship("Account", foreign_keys=[credit_account_id])
    debit_account = relationship("Account", foreign_keys=[debit_account_id])

    @property
    def amount(self) -> Decimal:
        return Decimal(self.times or 0) * Decimal(self.price or 0)

    @property
    def credit_account_code(self) -> str | None:
        return self.credit_account.code if self.credit_account else None

    @property
    def debit_account_code(self) -> str | None:
        return self.debit_account.code if self.debit_account else None
