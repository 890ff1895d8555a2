# orderdesk/models/order.py

import enum
from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, JSON
from orderdesk.utils.database import Base
from orderdesk.utils.timeutil import utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"
    ON_HOLD = "on_hold"


class DeliveryRegion(str, enum.Enum):
    INSIDE_DHAKA = "inside_dhaka"
    OUTSIDE_DHAKA = "outside_dhaka"


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, index=True)                  # ORD-12345
    moderator_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    customer_name    = Column(String, nullable=False)
    customer_phone   = Column(String, nullable=False, index=True)
    customer_address = Column(Text, nullable=False)

    delivery_region = Column(String, nullable=False, default=DeliveryRegion.INSIDE_DHAKA.value)
    delivery_charge = Column(Float, nullable=False, default=0)

    items        = Column(JSON, nullable=False, default=list)          # [{id, product_id, quantity, price}]
    subtotal     = Column(Float, nullable=False, default=0)
    total_amount = Column(Float, nullable=False, default=0)            # subtotal + delivery_charge

    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)

    # Курьер (Steadfast)
    consignment_id = Column(String, nullable=True)
    tracking_code  = Column(String, nullable=True)
    courier_status = Column(String, nullable=True)

    notes      = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
