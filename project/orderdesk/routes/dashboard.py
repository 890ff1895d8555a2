# orderdesk/routes/dashboard.py

from fastapi import APIRouter, Depends, Request
from orderdesk.models.user import User as UserModel
from orderdesk.schemas.dashboard import DashboardResponse
from orderdesk.services.dashboard import read_dashboard_service
from orderdesk.routes.auth import get_current_user

router = APIRouter()


@router.get(
    "/",
    response_model=DashboardResponse,
    summary="Метрики дашборда",
    response_description="Админ — по всем заказам с финансами, модератор — по своим заказам и лидам",
    responses={
        200: {"description": "Метрики посчитаны"},
        401: {"description": "Некорректный пользователь или токен"},
    },
)
async def read_dashboard(request: Request, current_user: UserModel = Depends(get_current_user)):
    try:
        return await read_dashboard_service(current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("dashboard", f"Ошибка расчёта метрик: {str(e)}")
        raise
