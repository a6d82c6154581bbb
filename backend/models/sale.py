# backend/models/sale.py
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Immutable record of a single sale.
# product_id is deliberately not a foreign key: sales history outlives deleted products.
class SaleRecord(Base):
    __tablename__ = "sales_reports"

    id = Column(Integer, primary_key=True, index=True)
    customer = Column(String, CheckConstraint("length(customer) > 0"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)
    quantity = Column(Integer, CheckConstraint("quantity > 0"), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)

    # Resolves to None once the product has been deleted
    product = relationship(
        "Product",
        primaryjoin="foreign(SaleRecord.product_id) == Product.id",
        viewonly=True,
        lazy="joined",
    )
