# orderdesk/schemas/lead.py

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime

from orderdesk.models.lead import LeadStatus


# ────────────── Импорт номеров ──────────────
class LeadImport(BaseModel):
    phone_numbers: str = Field(..., description="Номера через перенос строки или запятую")
    customer_name: Optional[str] = None
    address: Optional[str] = None
    moderator_id: str
    assigned_date: Optional[date] = Field(None, description="По умолчанию — сегодня (BST)")


# ────────────── Переназначение диапазона ──────────────
class LeadReassign(BaseModel):
    start: int = Field(..., ge=1, description="Позиция в списке, с 1")
    end: int = Field(..., ge=1, description="Позиция в списке включительно")
    moderator_id: str
    assigned_date: Optional[date] = None


class LeadStatusUpdate(BaseModel):
    status: LeadStatus


# ────────────── RESPONSE ──────────────
class Lead(BaseModel):
    id: str
    phone_number: str
    customer_name: str = ""
    address: str = ""
    moderator_id: str
    status: LeadStatus
    assigned_date: date
    created_at: datetime

    model_config = {
        "from_attributes": True
    }


class LeadBatchResponse(BaseModel):
    count: int
    leads: List[Lead]


class LeadStats(BaseModel):
    today: int          # на сегодня, ещё не обработаны
    tomorrow: int
    total: int


class LeadLookup(BaseModel):
    phone_number: str
    customer_name: str = ""
    address: str = ""

    model_config = {
        "from_attributes": True
    }
