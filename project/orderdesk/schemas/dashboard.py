# orderdesk/schemas/dashboard.py

from pydantic import BaseModel
from typing import Dict, Optional, List

from orderdesk.models.user import UserRole
from orderdesk.schemas.lead import LeadStats


class StatusSlice(BaseModel):
    name: str
    status: str
    value: int


class Financials(BaseModel):
    total_revenue: float
    confirmed_value: float
    delivered_value: float
    cancelled_value: float


class DashboardResponse(BaseModel):
    role: UserRole
    total_orders: int
    pending: int
    confirmed: int
    delivered: int
    cancelled: int
    counts: Dict[str, int]                      # по каждому статусу заказа
    confirmation_rate: int
    status_breakdown: List[StatusSlice]
    financials: Optional[Financials] = None     # только админ
    total_leads: Optional[int] = None           # только админ
    lead_stats: Optional[LeadStats] = None      # только модератор
