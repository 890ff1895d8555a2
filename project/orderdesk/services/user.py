# orderdesk/services/user.py

import uuid
from datetime import timedelta

from sqlalchemy import func
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, Request

from orderdesk.config import settings
from orderdesk.models.user import User as UserModel, UserRole
from orderdesk.models.lead import Lead as LeadModel, LeadStatus
from orderdesk.models.order import Order as OrderModel
from orderdesk.schemas.user import ModeratorCreate, ModeratorStats, UserResponse
from orderdesk.utils.security import hash_password
from orderdesk.utils.timeutil import as_utc, utcnow


def is_online(user: UserModel, now=None) -> bool:
    """Модератор онлайн, если heartbeat был за последние PRESENCE_ONLINE_SECONDS."""
    if user.last_seen is None:
        return False
    now = now or utcnow()
    return now - as_utc(user.last_seen) < timedelta(seconds=settings.PRESENCE_ONLINE_SECONDS)


async def get_user_by_email(email: str, request: Request) -> UserModel | None:
    db = request.state.db
    result = await db.execute(select(UserModel).where(UserModel.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def get_user_by_id(id: str, request: Request) -> UserModel | None:
    db = request.state.db
    result = await db.execute(select(UserModel).where(UserModel.id == id))
    return result.scalar_one_or_none()


async def read_moderator_service(id: str, request: Request) -> UserModel:
    """
    Чтение модератора по ID, 404 если нет или это не модератор.
    """
    log = request.app.state.log

    db_user = await get_user_by_id(id, request)
    if db_user is None or db_user.role != UserRole.MODERATOR.value:
        await log.log_error("moderator", "Модератор не найден", {"id": id})
        raise HTTPException(status_code=404, detail="Модератор не найден")
    return db_user


async def read_moderators_service(request: Request) -> list[ModeratorStats]:
    """
    Список модераторов со статистикой звонков, заказов и присутствием.
    """
    db = request.state.db
    log = request.app.state.log

    result = await db.execute(
        select(UserModel).where(UserModel.role == UserRole.MODERATOR.value).order_by(UserModel.created_at)
    )
    moderators = result.scalars().all()

    lead_rows = await db.execute(
        select(LeadModel.moderator_id, LeadModel.status, func.count()).group_by(LeadModel.moderator_id, LeadModel.status)
    )
    totals: dict[str, int] = {}
    completed: dict[str, int] = {}
    for moderator_id, status, count in lead_rows.all():
        totals[moderator_id] = totals.get(moderator_id, 0) + count
        if status != LeadStatus.PENDING.value:
            completed[moderator_id] = completed.get(moderator_id, 0) + count

    order_rows = await db.execute(select(OrderModel.moderator_id, func.count()).group_by(OrderModel.moderator_id))
    orders = dict(order_rows.all())

    now = utcnow()
    stats = []
    for mod in moderators:
        total = totals.get(mod.id, 0)
        done = completed.get(mod.id, 0)
        stats.append(ModeratorStats(
            **UserResponse.model_validate(mod).model_dump(),
            total_leads=total,
            completed_leads=done,
            completion_rate=round(done / total * 100) if total else 0,
            order_count=orders.get(mod.id, 0),
            online=is_online(mod, now),
        ))

    await log.log_info("moderator", f"{len(stats)} модераторов загружено")
    return stats


async def create_moderator_service(moderator: ModeratorCreate, request: Request) -> UserModel:
    """
    Создание модератора: email в нижнем регистре, пароль в виде хэша.
    """
    db = request.state.db
    log = request.app.state.log

    email = moderator.email.strip().lower()
    if await get_user_by_email(email, request) is not None:
        await log.log_warning("moderator", "Email уже занят", {"email": email})
        raise HTTPException(status_code=409, detail=f"Пользователь с email '{email}' уже существует")

    db_user = UserModel(
        id=f"m-{uuid.uuid4().hex[:12]}",
        name=moderator.name.strip(),
        email=email,
        password=hash_password(moderator.password.strip()),
        role=UserRole.MODERATOR.value,
        is_active=True,
    )
    db.add(db_user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail=f"Пользователь с email '{email}' уже существует")

    await log.log_info("moderator", "Модератор создан", {"id": db_user.id, "email": email})
    return db_user


async def set_moderator_active_service(id: str, is_active: bool, request: Request) -> UserModel:
    """
    Включение/отключение модератора (вместо удаления).
    """
    db = request.state.db
    log = request.app.state.log

    db_user = await read_moderator_service(id, request)
    db_user.is_active = is_active
    db.add(db_user)
    await db.commit()

    await log.log_info("moderator", "Статус активности изменён", {"id": id, "is_active": is_active})
    return db_user


async def delete_moderator_service(id: str, request: Request) -> None:
    """
    Удаление модератора. Если на него ссылаются заказы или лиды — 409,
    такого модератора нужно деактивировать.
    """
    db = request.state.db
    log = request.app.state.log

    db_user = await read_moderator_service(id, request)

    orders = await db.scalar(select(func.count()).select_from(OrderModel).where(OrderModel.moderator_id == id))
    leads = await db.scalar(select(func.count()).select_from(LeadModel).where(LeadModel.moderator_id == id))
    if orders or leads:
        await log.log_warning("moderator", "Удаление отклонено: есть связанные записи",
                              {"id": id, "orders": orders, "leads": leads})
        raise HTTPException(
            status_code=409,
            detail="У модератора есть заказы или лиды, его можно только деактивировать",
        )

    await db.delete(db_user)
    await db.commit()
    await log.log_info("moderator", "Модератор удалён", {"id": id})


async def touch_presence_service(user: UserModel, request: Request) -> UserModel:
    """
    Heartbeat: обновляет last_seen модератора. Присутствие админа не отслеживается.
    """
    db = request.state.db

    if user.is_admin:
        return user

    user.last_seen = utcnow()
    db.add(user)
    await db.commit()
    return user
