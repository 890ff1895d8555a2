# orderdesk/routes/auth.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jwt import ExpiredSignatureError, InvalidTokenError

from orderdesk.models.user import User as UserModel
from orderdesk.schemas.user import TokenResponse, UserResponse
from orderdesk.services.user import get_user_by_email, get_user_by_id, touch_presence_service
from orderdesk.utils.security import create_access_token, decode_access_token, verify_password

router = APIRouter()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


async def get_current_user(request: Request, token: str = Depends(oauth2_scheme)) -> UserModel:
    """
    Проверяет JWT токен и возвращает пользователя.

    **Статусы:**
    - 401 Unauthorized – токен истёк, неверный или пользователь не найден
    - 403 Forbidden – пользователь деактивирован
    """
    log = request.app.state.log
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError:
        await log.log_warning("auth", "Токен истёк")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except InvalidTokenError:
        await log.log_warning("auth", "Неверный токен")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalid")

    user_id = payload.get("sub")
    if user_id is None:
        await log.log_error("auth", "Токен не содержит sub")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = await get_user_by_id(user_id, request)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Аккаунт отключён")

    return user


async def require_admin(current_user: UserModel = Depends(get_current_user)) -> UserModel:
    """Доступ только для администратора."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return current_user


# ────────────── TOKEN ──────────────
@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Получение JWT токена (вход администратора или модератора)",
    responses={
        200: {"description": "Токен успешно получен"},
        401: {"description": "Неверный email или пароль"},
        403: {"description": "Аккаунт модератора отключён"},
        422: {"description": "Ошибка валидации входных данных"},
    }
)
async def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends()
):
    """
    Авторизация по email и паролю.

    **Входные данные (form-data):**
    - `username`: str — email пользователя
    - `password`: str — пароль

    **Выходные данные (JSON):**
    - `access_token`: str — JWT токен
    - `token_type`: str — всегда `"bearer"`
    - `user`: данные пользователя без пароля
    """
    log = request.app.state.log

    user = await get_user_by_email(form_data.username, request)
    if user is None or not verify_password(form_data.password, user.password):
        await log.log_warning("auth", "Неудачная попытка входа", {"username": form_data.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Неверный email или пароль",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        await log.log_warning("auth", "Вход отключённого модератора", {"id": user.id})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Аккаунт отключён")

    access_token = create_access_token(data={"sub": user.id, "role": user.role})
    await log.log_info("auth", "Пользователь авторизован", {"id": user.id, "role": user.role})

    return {"access_token": access_token, "token_type": "bearer", "user": UserResponse.model_validate(user)}


# ────────────── ME ──────────────
@router.get(
    "/me",
    response_model=UserResponse,
    summary="Текущий пользователь",
)
async def read_me(current_user: UserModel = Depends(get_current_user)):
    return current_user


# ────────────── HEARTBEAT ──────────────
@router.post(
    "/heartbeat",
    response_model=UserResponse,
    summary="Отметка присутствия (раз в минуту из UI)",
    responses={
        200: {"description": "last_seen обновлён"},
        401: {"description": "Некорректный пользователь или токен"},
    },
)
async def heartbeat(request: Request, current_user: UserModel = Depends(get_current_user)):
    try:
        return await touch_presence_service(current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("auth", f"Ошибка heartbeat: {str(e)}", {"id": current_user.id})
        raise
