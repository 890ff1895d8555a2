# orderdesk/schemas/product.py

from pydantic import BaseModel, Field
from typing import Optional


class ProductBase(BaseModel):
    sku: str = Field(..., min_length=1, description="Код товара, приводится к верхнему регистру")
    name: str = Field(..., min_length=1)
    price: float = Field(..., gt=0, description="Цена, ৳")
    stock: Optional[int] = Field(None, ge=0, description="Остаток; пусто — по умолчанию")


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    """Частичное обновление: передаются только изменяемые поля."""
    sku: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, gt=0)
    stock: Optional[int] = Field(None, ge=0)


class Product(BaseModel):
    id: str
    sku: str
    name: str
    price: float
    stock: Optional[int] = None

    model_config = {
        "from_attributes": True
    }
