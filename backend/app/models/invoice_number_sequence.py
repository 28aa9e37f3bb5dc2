from sqlalchemy import Column, Integer

from backend.app.db.base_class import Base


class InvoiceNumberSequence(Base):
    __tablename__ = "invoice_number_sequences"

    year = Column(Integer, primary_key=True, autoincrement=False)
    last_number = Column(Integer, nullable=False, default=0)
