# orderdesk/utils/database.py

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.future import select
from sqlalchemy.pool import NullPool
from sqlalchemy import func
from orderdesk.config import settings
from orderdesk.utils.security import hash_password

# ────────────── Base для моделей ──────────────
Base = declarative_base()

# ────────────── URL базы данных ──────────────
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# ────────────── Асинхронный движок ──────────────
engine_kwargs = {"echo": settings.LOG_PRINT_DB.lower() in ("1", "true", "yes")}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    # sqlite-соединения не переиспользуем между event loop'ами
    engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(SQLALCHEMY_DATABASE_URL, **engine_kwargs)

# ────────────── Асинхронная сессия ──────────────
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False  # объекты остаются читаемыми после commit (ответы API)
)

ADMIN_ID = "admin-root"

# Стартовый каталог, если таблица товаров пустая
INITIAL_PRODUCTS = [
    {"id": "p1", "sku": "SCP-500", "name": "🌶️ মিষ্টি মরিচ (Sweet Chili Powder) - ৫০০ গ্রাম", "price": 550},
    {"id": "p2", "sku": "SCP-1KG", "name": "🌶️ মিষ্টি মরিচ (Sweet Chili Powder) - ১ কেজি", "price": 950},
    {"id": "p3", "sku": "SGM-200", "name": "👑 শাহী গরম মসলা (Shahi Garam Masala) - ২০০ গ্রাম", "price": 650},
    {"id": "p4", "sku": "SGM-500", "name": "👑 শাহী গরম মসলা (Shahi Garam Masala) - ৫০০ গ্রাম", "price": 1424},
    {"id": "p5", "sku": "TUR-500", "name": "💛 দেশি হলুদের গুঁড়া (Turmeric Powder) - ৫০০ গ্রাম", "price": 290},
    {"id": "p6", "sku": "COR-500", "name": "🌿 দেশি ধনিয়া গুঁড়া (Coriander Powder) - ৫০০ গ্রাম", "price": 250},
    {"id": "p7", "sku": "CUM-500", "name": "🌾 দেশি জিরা গুঁড়া (Cumin Powder) - ৫০০ গ্রাম", "price": 780},
    {"id": "p8", "sku": "MEZ-200", "name": "🍖 চট্টগ্রামের অরিজিনাল মেজবানি মাংসের মসলা (Mezban Masala) - ২০০ গ্রাম", "price": 680},
    {"id": "p9", "sku": "MEZ-500", "name": "🍖 চট্টগ্রামের অরিজিনাল মেজবানি মাংসের মসলা (Mezban Masala) - ৫০০ গ্রাম", "price": 1480},
]

# ────────────── Инициализация базы данных ──────────────
async def init_db():
    """
    Создаёт все таблицы в базе данных (если ещё не созданы)
    Проверяет наличие администратора
        - Если админ отсутствует, создаёт его из AUTH_LOGIN / AUTH_PASSWORD
        - Пароль хранится в виде хэша
    Если каталог пустой, заполняет его стартовыми товарами
    """
    # Регистрируем модели в metadata
    from orderdesk.models.user import User, UserRole
    from orderdesk.models.product import Product
    from orderdesk.models.lead import Lead  # noqa: F401
    from orderdesk.models.order import Order  # noqa: F401
    from orderdesk.models.setting import Setting  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.role == UserRole.ADMIN.value))
        if result.scalars().first() is None:
            session.add(User(
                id=ADMIN_ID,
                name=settings.AUTH_NAME,
                email=settings.AUTH_LOGIN.strip().lower(),
                password=hash_password(settings.AUTH_PASSWORD),
                role=UserRole.ADMIN.value,
                is_active=True,
            ))

        count = await session.scalar(select(func.count()).select_from(Product))
        if not count:
            for item in INITIAL_PRODUCTS:
                session.add(Product(stock=settings.DEFAULT_PRODUCT_STOCK, **item))

        await session.commit()


async def close_db():
    """Закрывает пул соединений движка."""
    await engine.dispose()
