# orderdesk/models/user.py

import enum
from sqlalchemy import Column, String, DateTime, Boolean
from orderdesk.utils.database import Base
from orderdesk.utils.timeutil import utcnow


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)             # admin-root / m-<hex>
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=True)                      # хэш пароля
    role = Column(String, nullable=False, default=UserRole.MODERATOR.value)
    last_seen = Column(DateTime(timezone=True), nullable=True)    # heartbeat модератора
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
