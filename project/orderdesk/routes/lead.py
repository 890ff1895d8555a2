# orderdesk/routes/lead.py

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from typing import List, Optional
from orderdesk.models.user import User as UserModel
from orderdesk.schemas.lead import (
    Lead,
    LeadBatchResponse,
    LeadImport,
    LeadLookup,
    LeadReassign,
    LeadStats,
    LeadStatusUpdate,
)
from orderdesk.services.lead import (
    LEAD_DAYS,
    import_leads_service,
    reassign_leads_service,
    read_leads_service,
    update_lead_status_service,
    delete_lead_service,
    lookup_lead_service,
    lead_stats,
)
from orderdesk.routes.auth import get_current_user, require_admin

router = APIRouter()

# ────────────── IMPORT ──────────────
@router.post(
    "/import",
    response_model=LeadBatchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Импорт номеров на модератора (админ)",
    responses={
        201: {"description": "Лиды созданы"},
        400: {"description": "Нет валидных номеров"},
        403: {"description": "Только администратор"},
        404: {"description": "Модератор не найден"},
    },
)
async def import_leads(request: Request, body: LeadImport, _=Depends(require_admin)):
    try:
        leads = await import_leads_service(body, request)
        return {"count": len(leads), "leads": leads}
    except Exception as e:
        await request.app.state.log.log_error("lead", f"Ошибка при импорте лидов: {str(e)}")
        raise


# ────────────── REASSIGN RANGE ──────────────
@router.post(
    "/reassign",
    response_model=LeadBatchResponse,
    summary="Переназначить диапазон лидов (админ)",
    responses={
        200: {"description": "Диапазон переназначен"},
        400: {"description": "Неверный диапазон"},
        404: {"description": "Модератор не найден"},
    },
)
async def reassign_leads(request: Request, body: LeadReassign, _=Depends(require_admin)):
    try:
        leads = await reassign_leads_service(body, request)
        return {"count": len(leads), "leads": leads}
    except Exception as e:
        await request.app.state.log.log_error("lead", f"Ошибка при переназначении: {str(e)}")
        raise


# ────────────── READ ALL ──────────────
@router.get(
    "/",
    response_model=List[Lead],
    summary="Список лидов",
    response_description="Админ — все лиды; модератор — свои, с фильтром по дню",
    responses={
        200: {"description": "Список лидов"},
        400: {"description": "Неизвестный фильтр day"},
    },
)
async def read_leads(
    request: Request,
    day: str = Query("all", description="today | tomorrow | all (для модератора)"),
    current_user: UserModel = Depends(get_current_user),
):
    if day not in LEAD_DAYS:
        raise HTTPException(status_code=400, detail=f"day должен быть одним из: {', '.join(LEAD_DAYS)}")
    try:
        if current_user.is_admin:
            return await read_leads_service(request)
        return await read_leads_service(request, moderator_id=current_user.id, day=day)
    except Exception as e:
        await request.app.state.log.log_error("lead", f"Ошибка при получении лидов: {str(e)}")
        raise


# ────────────── MY STATS ──────────────
@router.get(
    "/stats",
    response_model=LeadStats,
    summary="Счётчики лидов модератора: сегодня / завтра / всего",
)
async def read_lead_stats(request: Request, current_user: UserModel = Depends(get_current_user)):
    try:
        leads = await read_leads_service(request, moderator_id=current_user.id)
        return lead_stats(leads)
    except Exception as e:
        await request.app.state.log.log_error("lead", f"Ошибка подсчёта лидов: {str(e)}", {"id": current_user.id})
        raise


# ────────────── LOOKUP ──────────────
@router.get(
    "/lookup",
    response_model=Optional[LeadLookup],
    summary="Автозаполнение формы заказа по телефону",
    response_description="Имя и адрес из лида или null",
)
async def lookup_lead(
    request: Request,
    phone: str = Query(..., min_length=1),
    _=Depends(get_current_user),
):
    try:
        return await lookup_lead_service(phone, request)
    except Exception as e:
        await request.app.state.log.log_error("lead", f"Ошибка поиска лида: {str(e)}", {"phone": phone})
        raise


# ────────────── UPDATE STATUS ──────────────
@router.patch(
    "/{id}/status",
    response_model=Lead,
    summary="Статус звонка",
    responses={
        200: {"description": "Статус обновлён"},
        403: {"description": "Лид другого модератора"},
        404: {"description": "Лид не найден"},
    },
)
async def update_lead_status(
    id: str,
    body: LeadStatusUpdate,
    request: Request,
    current_user: UserModel = Depends(get_current_user),
):
    try:
        return await update_lead_status_service(id, body.status, current_user, request)
    except Exception as e:
        await request.app.state.log.log_error("lead", f"Ошибка при обновлении лида: {str(e)}", {"id": id})
        raise


# ────────────── DELETE ──────────────
@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить лид (админ)",
    responses={
        204: {"description": "Лид удалён"},
        404: {"description": "Лид не найден"},
    },
)
async def delete_lead(id: str, request: Request, _=Depends(require_admin)):
    try:
        await delete_lead_service(id, request)
    except Exception as e:
        await request.app.state.log.log_error("lead", f"Ошибка при удалении лида: {str(e)}", {"id": id})
        raise
