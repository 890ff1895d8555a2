# orderdesk/models/setting.py

from sqlalchemy import Column, Integer, String, JSON
from orderdesk.utils.database import Base

SETTINGS_ID = 1


class Setting(Base):
    """Одна строка настроек (id=1): конфиг курьера и логотип."""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    courier_config = Column(JSON, nullable=True)
    logo_url = Column(String, nullable=True)
