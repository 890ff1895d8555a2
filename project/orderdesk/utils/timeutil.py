# orderdesk/utils/timeutil.py
# Даты по времени Бангладеш (BST, UTC+6)

from datetime import date, datetime, timedelta, timezone

BST = timezone(timedelta(hours=6), name="BST")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """sqlite возвращает naive datetime, считаем его UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def bst_date(value: datetime) -> date:
    """Календарная дата момента времени в BST."""
    return as_utc(value).astimezone(BST).date()


def today_bst(now: datetime | None = None) -> date:
    return bst_date(now or utcnow())


def tomorrow_bst(now: datetime | None = None) -> date:
    return today_bst(now) + timedelta(days=1)
