# orderdesk/services/export.py

from datetime import date

from sqlalchemy.future import select
from fastapi import HTTPException, Request

from orderdesk.models.order import Order as OrderModel
from orderdesk.models.product import Product as ProductModel
from orderdesk.models.user import User as UserModel
from orderdesk.utils.timeutil import bst_date

# UTF-8 BOM: Excel иначе не распознаёт бенгальский текст
BOM = "\ufeff"

CSV_HEADERS = [
    "Order ID", "Date", "Customer Name", "Phone", "Address",
    "Items Ordered", "Total Amount", "Status", "Steadfast ID", "Moderator",
]


def export_filename(start: date, end: date) -> str:
    return f"Orders_{start.isoformat()}_to_{end.isoformat()}.csv"


def item_summary(items: list[dict], products: dict[str, ProductModel]) -> str:
    """'Название [SKU] (x2) | ...' — запятые из названий убираются."""
    parts = []
    for it in items:
        product = products.get(it.get("product_id"))
        name = (product.name if product else "Item").replace(",", "")
        sku = product.sku if product else "N/A"
        parts.append(f"{name} [{sku}] (x{it.get('quantity', 0)})")
    return " | ".join(parts)


def format_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def quoted(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def build_orders_csv(
    orders: list[OrderModel],
    products: dict[str, ProductModel],
    moderators: dict[str, UserModel],
) -> str:
    """
    CSV заказов для Excel: BOM, текстовые колонки всегда в кавычках,
    телефон с апострофом (Excel держит его строкой), дата dd/mm/YYYY по BST,
    статус в верхнем регистре.
    """
    rows = [",".join(CSV_HEADERS)]

    for o in orders:
        moderator = moderators.get(o.moderator_id)
        rows.append(",".join([
            o.id,
            bst_date(o.created_at).strftime("%d/%m/%Y"),
            quoted(o.customer_name),
            f"'{o.customer_phone}",
            quoted(o.customer_address),
            quoted(item_summary(o.items or [], products)),
            format_amount(o.total_amount),
            o.status.upper(),
            o.consignment_id or "NOT_SYNCED",
            quoted(moderator.name if moderator else "Unknown"),
        ]))

    return BOM + "\n".join(rows)


async def export_orders_service(start: date, end: date, request: Request) -> str:
    """
    Выгрузка заказов за период [start, end] (даты BST, включительно).
    """
    db = request.state.db
    log = request.app.state.log

    if end < start:
        raise HTTPException(status_code=400, detail="Конец периода раньше начала")

    result = await db.execute(select(OrderModel).order_by(OrderModel.created_at.desc()))
    orders = [o for o in result.scalars().all() if start <= bst_date(o.created_at) <= end]
    if not orders:
        await log.log_warning("export", "Нет заказов за период", {"start": start, "end": end})
        raise HTTPException(status_code=404, detail="За выбранный период заказов нет")

    products = {p.id: p for p in (await db.execute(select(ProductModel))).scalars().all()}
    moderators = {u.id: u for u in (await db.execute(select(UserModel))).scalars().all()}

    content = build_orders_csv(orders, products, moderators)
    await log.log_info("export", f"{len(orders)} заказов выгружено", {"start": start, "end": end})
    return content
