# orderdesk/models/product.py

from sqlalchemy import Column, String, Float, Integer
from orderdesk.utils.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, index=True)
    sku = Column(String, unique=True, nullable=False)   # код товара
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False)               # ৳
    stock = Column(Integer, nullable=True)              # None — остаток не отслеживается
