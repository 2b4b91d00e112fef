from sqlalchemy import Column, Integer, String

from invoicing.db.base import Base


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(20), nullable=False)
    name = Column(String(255), nullable=False)
    street = Column(String(255), nullable=True)
    zip_code = Column(String(20), nullable=True)
    city = Column(String(255), nullable=True)
    email = Column(String(320), nullable=True)

    __mapper_args__ = {"polymorphic_on": type, "polymorphic_identity": "person"}

    def __str__(self) -> str:
        return self.name


class Company(Person):
    __mapper_args__ = {"polymorphic_identity": "company"}


class Customer(Person):
    __mapper_args__ = {"polymorphic_identity": "customer"}
