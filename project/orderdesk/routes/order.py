# orderdesk/routes/order.py

from datetime import date

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response
from typing import List, Optional
from orderdesk.models.user import User as UserModel
from orderdesk.schemas.order import Order, OrderCreate, OrderStatusUpdate
from orderdesk.services.order import (
    create_order_service,
    read_orders_service,
    read_order_service,
    update_order_status_service,
    sync_order_service,
)
from orderdesk.services.export import export_filename, export_orders_service
from orderdesk.routes.auth import get_current_user, require_admin

router = APIRouter()

# ────────────── CREATE ──────────────
@router.post(
    "/",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    summary="Создать заказ",
    response_description="Созданный заказ с посчитанными суммами",
    responses={
        201: {"description": "Заказ успешно создан"},
        400: {"description": "Нет товаров, некорректный телефон или недостаточно остатка"},
        401: {"description": "Некорректный пользователь или токен"},
        404: {"description": "Товар не найден"},
        422: {"description": "Неверные данные запроса"},
    },
)
async def create_order(
    request: Request,
    order: OrderCreate,
    current_user: UserModel = Depends(get_current_user),
):
    try:
        return await create_order_service(order, current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при создании заказа: {str(e)}")
        raise


# ────────────── READ ALL ──────────────
@router.get(
    "/",
    response_model=List[Order],
    status_code=status.HTTP_200_OK,
    summary="Получить список заказов",
    response_description="Админ — все заказы, модератор — свои; новые сверху",
    responses={
        200: {"description": "Список заказов успешно получен"},
        401: {"description": "Некорректный пользователь или токен"},
    },
)
async def read_orders(
    request: Request,
    search: Optional[str] = Query(None, description="Телефон, имя клиента или номер заказа"),
    status_filter: Optional[str] = Query(None, alias="status", description="Статус или all"),
    current_user: UserModel = Depends(get_current_user),
):
    try:
        return await read_orders_service(request, current_user, search, status_filter)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении списка заказов: {str(e)}")
        raise


# ────────────── EXPORT CSV ──────────────
@router.get(
    "/export",
    summary="Выгрузка заказов в CSV (админ)",
    response_description="CSV с BOM для Excel",
    responses={
        200: {"description": "CSV файл", "content": {"text/csv": {}}},
        400: {"description": "Неверный период"},
        403: {"description": "Только администратор"},
        404: {"description": "За период заказов нет"},
    },
)
async def export_orders(
    request: Request,
    start: date = Query(..., description="Начало периода, YYYY-MM-DD (BST)"),
    end: date = Query(..., description="Конец периода включительно"),
    _=Depends(require_admin),
):
    try:
        content = await export_orders_service(start, end, request)
    except Exception as e:
        await request.app.state.log.log_error("export", f"Ошибка выгрузки: {str(e)}")
        raise

    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(start, end)}"'},
    )


# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    response_model=Order,
    status_code=status.HTTP_200_OK,
    summary="Получить заказ по ID",
    responses={
        200: {"description": "Заказ найден и возвращён"},
        404: {"description": "Заказ не найден"},
    },
)
async def read_order(
    id: str,
    request: Request,
    current_user: UserModel = Depends(get_current_user),
):
    try:
        return await read_order_service(id, request, current_user)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении заказа: {str(e)}", {"id": id})
        raise


# ────────────── UPDATE STATUS ──────────────
@router.patch(
    "/{id}/status",
    response_model=Order,
    status_code=status.HTTP_200_OK,
    summary="Сменить статус заказа (админ)",
    responses={
        200: {"description": "Статус обновлён"},
        403: {"description": "Модератор не может менять статус"},
        404: {"description": "Заказ не найден"},
        422: {"description": "Неизвестный статус"},
    },
)
async def update_order_status(
    id: str,
    body: OrderStatusUpdate,
    request: Request,
    _=Depends(require_admin),
):
    try:
        return await update_order_status_service(id, body, request)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при обновлении заказа: {str(e)}", {"id": id})
        raise


# ────────────── COURIER SYNC ──────────────
@router.post(
    "/{id}/sync",
    response_model=Order,
    summary="Передать заказ курьеру Steadfast (админ)",
    responses={
        200: {"description": "Консайнмент создан, заказ подтверждён"},
        404: {"description": "Заказ не найден"},
        409: {"description": "Заказ уже передан курьеру"},
        502: {"description": "Курьер недоступен или отклонил заказ"},
    },
)
async def sync_order(id: str, request: Request, _=Depends(require_admin)):
    try:
        return await sync_order_service(id, request)
    except Exception as e:
        await request.app.state.log.log_error("courier", f"Ошибка синхронизации: {str(e)}", {"id": id})
        raise

