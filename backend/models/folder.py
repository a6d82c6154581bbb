# backend/models/folder.py
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Groups products inside a single store
class Folder(Base):
    __tablename__ = "folders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, CheckConstraint("length(name) > 0"), nullable=False)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)

    store = relationship("Store")
