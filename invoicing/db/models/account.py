from sqlalchemy import Column, Integer, String

from invoicing.db.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    tags = Column(String, nullable=False, default="")
    iban = Column(String(34), nullable=True)

    @property
    def tag_list(self) -> list[str]:
        return [tag.strip() for tag in (self.tags or "").split(",") if tag.strip()]

    def __str__(self) -> str:
        return f"{self.code} - {self.title}"
