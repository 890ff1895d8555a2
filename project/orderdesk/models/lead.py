# orderdesk/models/lead.py

import enum
from sqlalchemy import Column, String, Date, DateTime, ForeignKey
from orderdesk.utils.database import Base
from orderdesk.utils.timeutil import utcnow


class LeadStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMMUNICATION = "communication"
    NO_RESPONSE = "no_response"


class Lead(Base):
    __tablename__ = "leads"

    id = Column(String, primary_key=True, index=True)
    phone_number = Column(String, nullable=False, index=True)
    customer_name = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")
    moderator_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default=LeadStatus.PENDING.value)
    assigned_date = Column(Date, nullable=False)        # день звонка (BST)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
