# backend/models/store.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from database import Base

# Model Store
# Top-level tenant of the inventory. Owns folders, which own products.
class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, CheckConstraint("length(name) > 0"), nullable=False)
