# orderdesk/services/courier.py

"""
Клиент API курьерской службы Steadfast.
Создаёт консайнмент по заказу и возвращает его ID, трек-код и статус.
"""

from dataclasses import dataclass

import requests
from fastapi.concurrency import run_in_threadpool

from orderdesk.config import settings
from orderdesk.models.order import Order as OrderModel
from orderdesk.schemas.setting import CourierConfig


class CourierError(Exception):
    """Курьер не настроен или отклонил заказ."""


@dataclass
class CourierResult:
    consignment_id: str
    tracking_code: str | None
    status: str


def build_payload(order: OrderModel) -> dict:
    """Тело запроса create_order: сумма наложенного платежа = итог заказа."""
    return {
        "invoice": order.id,
        "recipient_name": order.customer_name,
        "recipient_phone": order.customer_phone,
        "recipient_address": order.customer_address,
        "cod_amount": order.total_amount,
        "note": order.notes or "",
    }


def create_consignment(order: OrderModel, config: CourierConfig) -> CourierResult:
    """
    Синхронный POST {base_url}/create_order.
    Любой ответ, кроме status=200 с объектом consignment, — CourierError.
    """
    if not config.api_key or not config.secret_key:
        raise CourierError("API ключи курьера не настроены")

    url = f"{(config.base_url or settings.COURIER_BASE_URL).rstrip('/')}/create_order"
    headers = {
        "Api-Key": config.api_key,
        "Secret-Key": config.secret_key,
        "Content-Type": "application/json",
    }

    try:
        resp = requests.post(url, json=build_payload(order), headers=headers, timeout=settings.COURIER_TIMEOUT)
    except requests.RequestException as e:
        raise CourierError(f"Курьер недоступен: {e}") from e

    try:
        body = resp.json()
    except ValueError:
        raise CourierError(f"Некорректный ответ курьера (HTTP {resp.status_code})")

    if not isinstance(body, dict):
        raise CourierError(f"Некорректный ответ курьера (HTTP {resp.status_code})")

    consignment = body.get("consignment")
    if body.get("status") != 200 or not consignment:
        message = body.get("message") or body.get("errors") or f"HTTP {resp.status_code}"
        raise CourierError(f"Курьер отклонил заказ: {message}")

    return CourierResult(
        consignment_id=str(consignment["consignment_id"]),
        tracking_code=consignment.get("tracking_code"),
        status=str(consignment.get("status") or "in_review"),
    )


async def sync_order_with_courier(order: OrderModel, config: CourierConfig) -> CourierResult:
    """Асинхронная обёртка: requests выполняется в пуле потоков."""
    return await run_in_threadpool(create_consignment, order, config)
