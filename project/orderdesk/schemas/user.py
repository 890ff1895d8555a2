# orderdesk/schemas/user.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from orderdesk.models.user import UserRole


class UserBase(BaseModel):
    """
    Базовая схема пользователя.
    """
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)


class ModeratorCreate(UserBase):
    """
    Схема создания модератора администратором.
    Пароль хэшируется перед сохранением, роль всегда moderator.
    """
    password: str = Field(..., min_length=1)


class ModeratorActive(BaseModel):
    is_active: bool


class UserResponse(UserBase):
    """
    Схема для ответа API (без пароля).
    """
    id: str
    role: UserRole
    last_seen: Optional[datetime] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class ModeratorStats(UserResponse):
    """
    Модератор в списке администратора: статистика звонков и присутствие.
    """
    total_leads: int = 0
    completed_leads: int = 0
    completion_rate: int = 0        # %, округлённый
    order_count: int = 0
    online: bool = False


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
