# backend/models/product.py
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Model Product
# Pojedynczy produkt w folderze sklepu.
# Stan magazynowy (quantity) zmienia wyłącznie StockLedger (restock / sprzedaż),
# ograniczenie CHECK pilnuje, aby nigdy nie spadł poniżej zera.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)

    quantity = Column(Integer, CheckConstraint("quantity >= 0"), nullable=False, default=0)

    folder_id = Column(Integer, ForeignKey("folders.id"), nullable=False, index=True)

    # Pochodzenie towaru (dowolny, niepusty opis).
    source = Column(String, CheckConstraint("length(source) > 0"), nullable=False)

    # Opcjonalny URL zdjęcia produktu (zwrócony przez blob store).
    image_url = Column(String, nullable=True)

    folder = relationship("Folder")
