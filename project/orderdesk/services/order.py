# orderdesk/services/order.py

import random
import uuid

from sqlalchemy.future import select
from fastapi import HTTPException, Request

from orderdesk.config import settings
from orderdesk.models.order import Order as OrderModel, OrderStatus, DeliveryRegion
from orderdesk.models.product import Product as ProductModel
from orderdesk.models.user import User as UserModel
from orderdesk.schemas.order import OrderCreate, OrderStatusUpdate, CourierData
from orderdesk.services.courier import CourierError, sync_order_with_courier
from orderdesk.services.setting import read_courier_config_service

MIN_CUSTOMER_PHONE_LENGTH = 11
ORDER_ID_ATTEMPTS = 20


def delivery_charge_for(region: DeliveryRegion) -> float:
    if region == DeliveryRegion.OUTSIDE_DHAKA:
        return settings.DELIVERY_CHARGE_OUTSIDE_DHAKA
    return settings.DELIVERY_CHARGE_INSIDE_DHAKA


def order_totals(items: list[dict], delivery_charge: float) -> tuple[float, float]:
    """(subtotal, total): сумма позиций и сумма с доставкой."""
    subtotal = round(sum(item["price"] * item["quantity"] for item in items), 2)
    return subtotal, round(subtotal + delivery_charge, 2)


def filter_orders(orders: list[OrderModel], search: str | None = None, status: str | None = None) -> list[OrderModel]:
    """
    Поиск по телефону, имени клиента или номеру заказа и фильтр по статусу.
    """
    if search:
        s = search.strip().lower()
        orders = [
            o for o in orders
            if s in o.customer_phone or s in o.customer_name.lower() or s in o.id.lower()
        ]
    if status and status != "all":
        orders = [o for o in orders if o.status == status]
    return orders


async def _new_order_id(request: Request) -> str:
    db = request.state.db
    for _ in range(ORDER_ID_ATTEMPTS):
        order_id = f"ORD-{random.randint(10000, 99999)}"
        if await db.get(OrderModel, order_id) is None:
            return order_id
    raise HTTPException(status_code=503, detail="Не удалось выделить номер заказа, повторите попытку")


def _validate_customer(order: OrderCreate):
    if not order.items:
        raise HTTPException(status_code=400, detail="Добавьте хотя бы один товар")
    if len(order.customer_phone.strip()) < MIN_CUSTOMER_PHONE_LENGTH:
        raise HTTPException(status_code=400, detail="Некорректный телефон (минимум 11 цифр)")
    if not order.customer_name.strip() or not order.customer_address.strip():
        raise HTTPException(status_code=400, detail="Имя и адрес клиента обязательны")


async def read_orders_service(
    request: Request,
    user: UserModel,
    search: str | None = None,
    status: str | None = None,
) -> list[OrderModel]:
    """
    Список заказов: админ видит все, модератор — свои. Новые сверху.
    """
    db = request.state.db
    log = request.app.state.log

    query = select(OrderModel).order_by(OrderModel.created_at.desc())
    if not user.is_admin:
        query = query.where(OrderModel.moderator_id == user.id)

    result = await db.execute(query)
    orders = filter_orders(result.scalars().all(), search, status)

    await log.log_info("order", f"{len(orders)} заказов загружено", {"user": user.id, "search": search, "status": status})
    return orders


async def create_order_service(order: OrderCreate, user: UserModel, request: Request) -> OrderModel:
    """
    Создание заказа модератором.
    Цены берутся из каталога, остатки списываются, итог = позиции + доставка.
    """
    db = request.state.db
    log = request.app.state.log

    _validate_customer(order)

    # Суммарное количество по товару (одна позиция может повторяться)
    requested: dict[str, int] = {}
    for item in order.items:
        requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

    result = await db.execute(select(ProductModel).where(ProductModel.id.in_(list(requested))))
    products = {p.id: p for p in result.scalars().all()}

    missing = [pid for pid in requested if pid not in products]
    if missing:
        await log.log_error("order", "Товары не найдены", {"ids": missing})
        raise HTTPException(status_code=404, detail=f"Товар не найден: {', '.join(missing)}")

    for pid, quantity in requested.items():
        stock = products[pid].stock
        if stock is not None and quantity > stock:
            await log.log_warning("order", "Недостаточно остатка", {"product_id": pid, "stock": stock, "quantity": quantity})
            raise HTTPException(
                status_code=400,
                detail=f"Остаток {products[pid].sku}: только {stock} шт.",
            )

    prefix = uuid.uuid4().hex[:8]
    items = [
        {
            "id": f"oi-{prefix}-{idx}",
            "product_id": item.product_id,
            "quantity": item.quantity,
            "price": products[item.product_id].price,
        }
        for idx, item in enumerate(order.items)
    ]
    delivery_charge = delivery_charge_for(order.delivery_region)
    subtotal, total = order_totals(items, delivery_charge)

    db_order = OrderModel(
        id=await _new_order_id(request),
        moderator_id=user.id,
        customer_name=order.customer_name.strip(),
        customer_phone=order.customer_phone.strip(),
        customer_address=order.customer_address.strip(),
        delivery_region=order.delivery_region.value,
        delivery_charge=delivery_charge,
        items=items,
        subtotal=subtotal,
        total_amount=total,
        status=OrderStatus.PENDING.value,
        notes=(order.notes or "").strip(),
    )
    db.add(db_order)

    for pid, quantity in requested.items():
        if products[pid].stock is not None:
            products[pid].stock -= quantity
            db.add(products[pid])

    await db.commit()

    await log.log_info("order", "Заказ создан", {"id": db_order.id, "total": total, "moderator_id": user.id})
    return db_order


async def read_order_service(id: str, request: Request, user: UserModel | None = None) -> OrderModel:
    """
    Чтение заказа по ID. Модератору доступны только свои заказы.
    """
    db = request.state.db
    log = request.app.state.log

    result = await db.execute(select(OrderModel).where(OrderModel.id == id))
    db_order = result.scalar_one_or_none()
    if db_order is None or (user is not None and not user.is_admin and db_order.moderator_id != user.id):
        await log.log_error("order", "Заказ не найден", {"id": id})
        raise HTTPException(status_code=404, detail="Заказ не найден")

    return db_order


def _apply_courier(db_order: OrderModel, courier: CourierData):
    db_order.consignment_id = courier.consignment_id
    db_order.courier_status = courier.courier_status
    db_order.tracking_code = courier.tracking_code


async def update_order_status_service(id: str, update: OrderStatusUpdate, request: Request) -> OrderModel:
    """
    Смена статуса заказа администратором (без проверки переходов).
    """
    db = request.state.db
    log = request.app.state.log

    db_order = await read_order_service(id, request)
    db_order.status = update.status.value
    if update.courier is not None:
        _apply_courier(db_order, update.courier)

    db.add(db_order)
    await db.commit()
    await log.log_info("order", "Статус заказа обновлён", {"id": id, "status": update.status})
    return db_order


async def sync_order_service(id: str, request: Request) -> OrderModel:
    """
    Отправка заказа курьеру. Успех — статус confirmed и данные консайнмента.
    """
    log = request.app.state.log

    db_order = await read_order_service(id, request)
    if db_order.consignment_id:
        raise HTTPException(status_code=409, detail=f"Заказ уже передан курьеру: {db_order.consignment_id}")

    config = await read_courier_config_service(request)
    try:
        res = await sync_order_with_courier(db_order, config)
    except CourierError as e:
        await log.log_error("courier", f"Синхронизация не удалась: {e}", {"id": id})
        raise HTTPException(status_code=502, detail=str(e))

    await log.log_info("courier", "Консайнмент создан", {"id": id, "consignment_id": res.consignment_id})
    return await update_order_status_service(
        id,
        OrderStatusUpdate(
            status=OrderStatus.CONFIRMED,
            courier=CourierData(
                consignment_id=res.consignment_id,
                courier_status=res.status,
                tracking_code=res.tracking_code,
            ),
        ),
        request,
    )
