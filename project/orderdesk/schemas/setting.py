# orderdesk/schemas/setting.py

from pydantic import BaseModel
from typing import Optional

from orderdesk.config import settings


class CourierConfig(BaseModel):
    api_key: str = ""
    secret_key: str = ""
    base_url: str = settings.COURIER_BASE_URL
    webhook_url: Optional[str] = ""
    account_email: str = ""
    account_password: Optional[str] = ""


class LogoUpdate(BaseModel):
    logo_url: Optional[str] = None


class SettingsResponse(BaseModel):
    courier_config: CourierConfig
    logo_url: Optional[str] = None
