# orderdesk/routes/moderator.py

from fastapi import APIRouter, Depends, Request, status
from typing import List
from orderdesk.schemas.user import ModeratorCreate, ModeratorActive, ModeratorStats, UserResponse
from orderdesk.services.user import (
    create_moderator_service,
    read_moderators_service,
    set_moderator_active_service,
    delete_moderator_service,
)
from orderdesk.routes.auth import require_admin

router = APIRouter()

# Весь раздел — только для администратора


# ────────────── READ ALL ──────────────
@router.get(
    "/",
    response_model=List[ModeratorStats],
    summary="Команда модераторов со статистикой звонков",
    responses={
        200: {"description": "Список модераторов"},
        403: {"description": "Только администратор"},
    },
)
async def read_moderators(request: Request, _=Depends(require_admin)):
    try:
        return await read_moderators_service(request)
    except Exception as e:
        await request.app.state.log.log_error("moderator", f"Ошибка при получении модераторов: {str(e)}")
        raise


# ────────────── CREATE ──────────────
@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить модератора",
    responses={
        201: {"description": "Модератор создан"},
        403: {"description": "Только администратор"},
        409: {"description": "Email уже занят"},
        422: {"description": "Неверные данные запроса"},
    },
)
async def create_moderator(request: Request, moderator: ModeratorCreate, _=Depends(require_admin)):
    try:
        return await create_moderator_service(moderator, request)
    except Exception as e:
        await request.app.state.log.log_error("moderator", f"Ошибка при создании модератора: {str(e)}")
        raise


# ────────────── ACTIVE FLAG ──────────────
@router.patch(
    "/{id}/active",
    response_model=UserResponse,
    summary="Включить / отключить модератора",
    responses={
        200: {"description": "Флаг обновлён"},
        404: {"description": "Модератор не найден"},
    },
)
async def set_moderator_active(id: str, body: ModeratorActive, request: Request, _=Depends(require_admin)):
    try:
        return await set_moderator_active_service(id, body.is_active, request)
    except Exception as e:
        await request.app.state.log.log_error("moderator", f"Ошибка при смене активности: {str(e)}", {"id": id})
        raise


# ────────────── DELETE ──────────────
@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить модератора без заказов и лидов",
    responses={
        204: {"description": "Модератор удалён"},
        404: {"description": "Модератор не найден"},
        409: {"description": "Есть связанные заказы или лиды"},
    },
)
async def delete_moderator(id: str, request: Request, _=Depends(require_admin)):
    try:
        await delete_moderator_service(id, request)
    except Exception as e:
        await request.app.state.log.log_error("moderator", f"Ошибка при удалении модератора: {str(e)}", {"id": id})
        raise
