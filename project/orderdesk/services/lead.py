# orderdesk/services/lead.py

import re
import uuid

from sqlalchemy.future import select
from fastapi import HTTPException, Request

from orderdesk.models.lead import Lead as LeadModel, LeadStatus
from orderdesk.models.user import User as UserModel
from orderdesk.schemas.lead import LeadImport, LeadReassign, LeadStats
from orderdesk.services.user import read_moderator_service
from orderdesk.utils.timeutil import today_bst, tomorrow_bst

MIN_LEAD_PHONE_LENGTH = 10
MIN_LOOKUP_PHONE_LENGTH = 11

LEAD_DAYS = ("today", "tomorrow", "all")


def parse_phone_numbers(text: str) -> list[str]:
    """
    Разбивает ввод по переносам строк и запятым.
    Пустые и короткие (< 10 символов) значения отбрасываются.
    """
    numbers = (n.strip() for n in re.split(r"[\n,]", text))
    return [n for n in numbers if len(n) >= MIN_LEAD_PHONE_LENGTH]


def lead_stats(leads: list[LeadModel], today=None, tomorrow=None) -> LeadStats:
    today = today or today_bst()
    tomorrow = tomorrow or tomorrow_bst()
    return LeadStats(
        today=sum(1 for l in leads if l.assigned_date == today and l.status == LeadStatus.PENDING.value),
        tomorrow=sum(1 for l in leads if l.assigned_date == tomorrow),
        total=len(leads),
    )


async def read_leads_service(request: Request, moderator_id: str | None = None, day: str = "all") -> list[LeadModel]:
    """
    Список лидов.
    - без moderator_id: все лиды (порядок администратора, новые сверху)
    - с moderator_id: лиды модератора, day = today | tomorrow | all, по дате назначения
    """
    db = request.state.db
    log = request.app.state.log

    query = select(LeadModel)
    if moderator_id is None:
        query = query.order_by(LeadModel.created_at.desc(), LeadModel.id)
    else:
        query = query.where(LeadModel.moderator_id == moderator_id)
        if day == "today":
            query = query.where(LeadModel.assigned_date == today_bst())
        elif day == "tomorrow":
            query = query.where(LeadModel.assigned_date == tomorrow_bst())
        query = query.order_by(LeadModel.assigned_date.desc(), LeadModel.created_at.desc())

    result = await db.execute(query)
    leads = result.scalars().all()

    await log.log_info("lead", f"{len(leads)} лидов загружено", {"moderator_id": moderator_id, "day": day})
    return leads


async def read_lead_service(id: str, request: Request) -> LeadModel:
    """
    Чтение лида по ID.
    """
    db = request.state.db
    log = request.app.state.log

    result = await db.execute(select(LeadModel).where(LeadModel.id == id))
    db_lead = result.scalar_one_or_none()
    if db_lead is None:
        await log.log_error("lead", "Лид не найден", {"id": id})
        raise HTTPException(status_code=404, detail="Лид не найден")
    return db_lead


async def import_leads_service(data: LeadImport, request: Request) -> list[LeadModel]:
    """
    Массовый импорт номеров на модератора.
    """
    db = request.state.db
    log = request.app.state.log

    await read_moderator_service(data.moderator_id, request)

    numbers = parse_phone_numbers(data.phone_numbers)
    if not numbers:
        await log.log_warning("lead", "Импорт без валидных номеров")
        raise HTTPException(status_code=400, detail="Нет номеров длиной от 10 символов")

    assigned_date = data.assigned_date or today_bst()
    customer_name = (data.customer_name or "").strip()
    address = (data.address or "").strip()

    leads = [
        LeadModel(
            id=f"lead-{uuid.uuid4().hex[:16]}",
            phone_number=number,
            customer_name=customer_name,
            address=address,
            moderator_id=data.moderator_id,
            status=LeadStatus.PENDING.value,
            assigned_date=assigned_date,
        )
        for number in numbers
    ]
    db.add_all(leads)
    await db.commit()

    await log.log_info("lead", f"{len(leads)} лидов назначено",
                       {"moderator_id": data.moderator_id, "assigned_date": assigned_date})
    return leads


async def reassign_leads_service(data: LeadReassign, request: Request) -> list[LeadModel]:
    """
    Переназначение диапазона позиций start..end (с 1, включительно) из списка
    администратора. Позиции за концом списка пропускаются, статус сбрасывается.
    """
    db = request.state.db
    log = request.app.state.log

    if data.end < data.start:
        raise HTTPException(status_code=400, detail="Конец диапазона меньше начала")

    await read_moderator_service(data.moderator_id, request)
    assigned_date = data.assigned_date or today_bst()

    leads = await read_leads_service(request)
    selected = leads[data.start - 1:data.end]
    for lead in selected:
        lead.moderator_id = data.moderator_id
        lead.assigned_date = assigned_date
        lead.status = LeadStatus.PENDING.value
        db.add(lead)
    await db.commit()

    await log.log_info("lead", f"Диапазон {data.start}-{data.end} переназначен",
                       {"count": len(selected), "moderator_id": data.moderator_id})
    return selected


async def update_lead_status_service(id: str, status: LeadStatus, user: UserModel, request: Request) -> LeadModel:
    """
    Обновление статуса звонка. Модератор — только свои лиды.
    """
    db = request.state.db
    log = request.app.state.log

    db_lead = await read_lead_service(id, request)
    if not user.is_admin and db_lead.moderator_id != user.id:
        await log.log_warning("lead", "Попытка изменить чужой лид", {"id": id, "user": user.id})
        raise HTTPException(status_code=403, detail="Лид назначен другому модератору")

    db_lead.status = status.value
    db.add(db_lead)
    await db.commit()

    await log.log_info("lead", "Статус лида обновлён", {"id": id, "status": status})
    return db_lead


async def delete_lead_service(id: str, request: Request) -> None:
    """
    Удаление лида по ID.
    """
    db = request.state.db
    log = request.app.state.log

    db_lead = await read_lead_service(id, request)
    await db.delete(db_lead)
    await db.commit()
    await log.log_info("lead", "Лид удалён", {"id": id})


async def lookup_lead_service(phone: str, request: Request) -> LeadModel | None:
    """
    Автозаполнение формы заказа: первый (самый новый) лид, номер которого
    содержит введённый (от 11 символов). Если у него нет ни имени, ни адреса,
    заполнять нечего: None.
    """
    db = request.state.db

    phone = phone.strip()
    if len(phone) < MIN_LOOKUP_PHONE_LENGTH:
        return None

    query = select(LeadModel).where(LeadModel.phone_number.contains(phone, autoescape=True))
    result = await db.execute(query.order_by(LeadModel.created_at.desc()))
    lead = result.scalars().first()
    if lead is None or not (lead.customer_name or lead.address):
        return None
    return lead
