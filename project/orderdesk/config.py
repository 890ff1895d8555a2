# orderdesk/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    AUTH_SECRET_KEY: str
    AUTH_TOKEN_EXPIRE_MINUTES: int = 720
    AUTH_LOGIN: str                         # email администратора
    AUTH_PASSWORD: str
    AUTH_NAME: str = "Baburchi Admin"
    AUTH_HASH_ROUNDS: int = 535000          # sha256_crypt rounds

    DATABASE_URL: str = "sqlite+aiosqlite:///./orderdesk.db"

    # Курьер (Steadfast)
    COURIER_BASE_URL: str = "https://portal.steadfast.com.bd/api/v1"
    COURIER_TIMEOUT: int = 10

    # Доставка, ৳
    DELIVERY_CHARGE_INSIDE_DHAKA: float = 80
    DELIVERY_CHARGE_OUTSIDE_DHAKA: float = 150

    DEFAULT_PRODUCT_STOCK: int = 50
    PRESENCE_ONLINE_SECONDS: int = 90       # модератор "онлайн", если активен за последние N секунд

    LOG_DIR: str = "orderdesk/log"
    LOG_PRINT: str = "1"
    LOG_PRINT_DB: str = "0"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
