# orderdesk/utils/security.py

"""
Хэширование паролей и JWT-токены.
Используется passlib с sha256_crypt, чтобы избежать проблем с bcrypt на Windows.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jwt import encode, decode
from passlib.context import CryptContext

from orderdesk.config import settings

pwd_context = CryptContext(
    schemes=["sha256_crypt"],
    deprecated="auto",
    sha256_crypt__default_rounds=settings.AUTH_HASH_ROUNDS,
)

ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """
    Хэширует пароль.

    :param password: строка пароля пользователя
    :return: хэшированный пароль в виде строки
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Проверяет совпадение пароля с его хэшем.
    Пустой хэш (пользователь без пароля) никогда не совпадает.
    """
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Создаёт JWT токен.
    Вход: dict (например {"sub": "user-id"})
    Выход: JWT строка
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.AUTH_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return encode(to_encode, settings.AUTH_SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Декодирует JWT. Исключения PyJWT пробрасываются вызывающему."""
    return decode(token, settings.AUTH_SECRET_KEY, algorithms=[ALGORITHM])
