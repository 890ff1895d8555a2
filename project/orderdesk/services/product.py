# orderdesk/services/product.py

import uuid

from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, Request

from orderdesk.config import settings
from orderdesk.models.product import Product as ProductModel
from orderdesk.schemas.product import ProductCreate, ProductUpdate


def normalize_sku(sku: str) -> str:
    return sku.strip().upper()


async def read_products_service(request: Request) -> list[ProductModel]:
    """
    Получение каталога, отсортированного по SKU.
    """
    db = request.state.db
    log = request.app.state.log

    result = await db.execute(select(ProductModel).order_by(ProductModel.sku))
    products = result.scalars().all()

    await log.log_info("product", f"{len(products)} товаров загружено")
    return products


async def read_product_service(id: str, request: Request) -> ProductModel:
    db = request.state.db
    log = request.app.state.log

    result = await db.execute(select(ProductModel).where(ProductModel.id == id))
    db_product = result.scalar_one_or_none()
    if db_product is None:
        await log.log_error("product", "Товар не найден", {"id": id})
        raise HTTPException(status_code=404, detail="Товар не найден")
    return db_product


async def _ensure_sku_free(sku: str, request: Request, exclude_id: str | None = None):
    db = request.state.db
    query = select(ProductModel).where(ProductModel.sku == sku)
    if exclude_id is not None:
        query = query.where(ProductModel.id != exclude_id)
    result = await db.execute(query)
    if result.scalars().first() is not None:
        raise HTTPException(status_code=409, detail=f"Товар с SKU '{sku}' уже существует")


async def _commit_product(db_product: ProductModel, request: Request):
    db = request.state.db
    db.add(db_product)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail=f"Товар с SKU '{db_product.sku}' уже существует")


async def create_product_service(product: ProductCreate, request: Request) -> ProductModel:
    """
    Создание товара. SKU в верхнем регистре, остаток по умолчанию DEFAULT_PRODUCT_STOCK.
    """
    log = request.app.state.log

    sku = normalize_sku(product.sku)
    await _ensure_sku_free(sku, request)

    db_product = ProductModel(
        id=f"p-{uuid.uuid4().hex[:12]}",
        sku=sku,
        name=product.name.strip(),
        price=product.price,
        stock=settings.DEFAULT_PRODUCT_STOCK if product.stock is None else product.stock,
    )
    await _commit_product(db_product, request)

    await log.log_info("product", "Товар создан", {"id": db_product.id, "sku": sku})
    return db_product


async def update_product_service(id: str, product_update: ProductUpdate, request: Request) -> ProductModel:
    """
    Обновление товара по ID.
    """
    log = request.app.state.log

    db_product = await read_product_service(id, request)
    data = product_update.model_dump(exclude_unset=True)

    if data.get("sku") is not None:
        data["sku"] = normalize_sku(data["sku"])
        await _ensure_sku_free(data["sku"], request, exclude_id=id)
    if data.get("name") is not None:
        data["name"] = data["name"].strip()

    for key, value in data.items():
        if value is not None or key == "stock":
            setattr(db_product, key, value)

    await _commit_product(db_product, request)
    await log.log_info("product", "Товар обновлён", {"id": id})
    return db_product


async def delete_product_service(id: str, request: Request) -> None:
    """
    Удаление товара. Позиции в старых заказах хранят цену и остаются как есть.
    """
    db = request.state.db
    log = request.app.state.log

    db_product = await read_product_service(id, request)
    await db.delete(db_product)
    await db.commit()
    await log.log_info("product", "Товар удалён", {"id": id})
