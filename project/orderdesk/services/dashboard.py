# orderdesk/services/dashboard.py

from sqlalchemy.future import select
from fastapi import Request

from orderdesk.models.order import Order as OrderModel, OrderStatus
from orderdesk.models.lead import Lead as LeadModel
from orderdesk.models.user import User as UserModel, UserRole
from orderdesk.schemas.dashboard import DashboardResponse, Financials, StatusSlice
from orderdesk.services.lead import lead_stats

CHART_STATUSES = [(status.value.replace("_", " ").title(), status) for status in OrderStatus]


def status_count(orders: list[OrderModel], status: OrderStatus) -> int:
    return sum(1 for o in orders if o.status == status.value)


def status_value(orders: list[OrderModel], status: OrderStatus) -> float:
    return round(sum(o.total_amount for o in orders if o.status == status.value), 2)


def confirmation_rate(orders: list[OrderModel]) -> int:
    """Доля confirmed + delivered, % с округлением; 0 без заказов."""
    if not orders:
        return 0
    success = status_count(orders, OrderStatus.CONFIRMED) + status_count(orders, OrderStatus.DELIVERED)
    return round(success / len(orders) * 100)


def build_metrics(orders: list[OrderModel], role: UserRole) -> DashboardResponse:
    return DashboardResponse(
        role=role,
        total_orders=len(orders),
        pending=status_count(orders, OrderStatus.PENDING),
        confirmed=status_count(orders, OrderStatus.CONFIRMED),
        delivered=status_count(orders, OrderStatus.DELIVERED),
        cancelled=status_count(orders, OrderStatus.CANCELLED),
        counts={status.value: status_count(orders, status) for status in OrderStatus},
        confirmation_rate=confirmation_rate(orders),
        status_breakdown=[
            StatusSlice(name=name, status=status.value, value=status_count(orders, status))
            for name, status in CHART_STATUSES
        ],
    )


async def read_dashboard_service(user: UserModel, request: Request) -> DashboardResponse:
    """
    Метрики дашборда.
    Админ: все заказы, финансы и общее число лидов.
    Модератор: свои заказы и свои лиды на сегодня/завтра.
    """
    db = request.state.db
    log = request.app.state.log

    orders_query = select(OrderModel)
    leads_query = select(LeadModel)
    if not user.is_admin:
        orders_query = orders_query.where(OrderModel.moderator_id == user.id)
        leads_query = leads_query.where(LeadModel.moderator_id == user.id)

    orders = (await db.execute(orders_query)).scalars().all()
    leads = (await db.execute(leads_query)).scalars().all()

    if user.is_admin:
        metrics = build_metrics(orders, UserRole.ADMIN)
        metrics.financials = Financials(
            total_revenue=round(sum(o.total_amount for o in orders), 2),
            confirmed_value=status_value(orders, OrderStatus.CONFIRMED),
            delivered_value=status_value(orders, OrderStatus.DELIVERED),
            cancelled_value=status_value(orders, OrderStatus.CANCELLED),
        )
        metrics.total_leads = len(leads)
    else:
        metrics = build_metrics(orders, UserRole.MODERATOR)
        metrics.lead_stats = lead_stats(leads)

    await log.log_info("dashboard", "Метрики посчитаны", {"user": user.id, "orders": len(orders)})
    return metrics
