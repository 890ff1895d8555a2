# orderdesk/routes/product.py

from fastapi import APIRouter, Depends, Request, status
from typing import List
from orderdesk.schemas.product import Product, ProductCreate, ProductUpdate
from orderdesk.services.product import (
    create_product_service,
    read_products_service,
    update_product_service,
    delete_product_service,
)
from orderdesk.routes.auth import get_current_user, require_admin

router = APIRouter()

# ────────────── READ ALL ──────────────
@router.get(
    "/",
    response_model=List[Product],
    status_code=status.HTTP_200_OK,
    summary="Каталог товаров",
    responses={
        200: {"description": "Каталог получен"},
        401: {"description": "Некорректный пользователь или токен"},
    },
)
async def read_products(request: Request, _=Depends(get_current_user)):
    try:
        return await read_products_service(request)
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при получении каталога: {str(e)}")
        raise


# ────────────── CREATE ──────────────
@router.post(
    "/",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить товар (админ)",
    responses={
        201: {"description": "Товар создан"},
        403: {"description": "Только администратор"},
        409: {"description": "SKU уже существует"},
        422: {"description": "Неверные данные запроса"},
    },
)
async def create_product(request: Request, product: ProductCreate, _=Depends(require_admin)):
    try:
        return await create_product_service(product, request)
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при создании товара: {str(e)}")
        raise


# ────────────── UPDATE ──────────────
@router.put(
    "/{id}",
    response_model=Product,
    status_code=status.HTTP_200_OK,
    summary="Изменить товар (админ)",
    responses={
        200: {"description": "Товар обновлён"},
        403: {"description": "Только администратор"},
        404: {"description": "Товар не найден"},
        409: {"description": "SKU уже существует"},
    },
)
async def update_product(id: str, product_update: ProductUpdate, request: Request, _=Depends(require_admin)):
    try:
        return await update_product_service(id, product_update, request)
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при обновлении товара: {str(e)}", {"id": id})
        raise


# ────────────── DELETE ──────────────
@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить товар (админ)",
    responses={
        204: {"description": "Товар удалён"},
        403: {"description": "Только администратор"},
        404: {"description": "Товар не найден"},
    },
)
async def delete_product(id: str, request: Request, _=Depends(require_admin)):
    try:
        await delete_product_service(id, request)
    except Exception as e:
        await request.app.state.log.log_error("product", f"Ошибка при удалении товара: {str(e)}", {"id": id})
        raise
