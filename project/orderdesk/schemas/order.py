# orderdesk/schemas/order.py

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from orderdesk.models.order import OrderStatus, DeliveryRegion


class OrderItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class OrderCreate(BaseModel):
    customer_name: str
    customer_phone: str
    customer_address: str
    delivery_region: DeliveryRegion = DeliveryRegion.INSIDE_DHAKA
    items: List[OrderItemCreate]
    notes: Optional[str] = ""


class OrderItem(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: float


class CourierData(BaseModel):
    consignment_id: str
    courier_status: Optional[str] = None
    tracking_code: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    courier: Optional[CourierData] = None


class Order(BaseModel):
    id: str
    moderator_id: str
    customer_name: str
    customer_phone: str
    customer_address: str
    delivery_region: DeliveryRegion
    delivery_charge: float
    items: List[OrderItem]
    subtotal: float
    total_amount: float
    status: OrderStatus
    consignment_id: Optional[str] = None
    tracking_code: Optional[str] = None
    courier_status: Optional[str] = None
    notes: str = ""
    created_at: datetime

    model_config = {
        "from_attributes": True
    }
