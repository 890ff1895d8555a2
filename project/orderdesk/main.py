# orderdesk/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager

from orderdesk.utils.log import Log
from orderdesk.utils.database import init_db, close_db
from orderdesk.middleware.db_middleware import DBSessionMiddleware
from orderdesk.routes import auth, dashboard, lead, moderator, order, product, setting

import os
import multiprocessing

# --- загрузка переменных окружения ---
load_dotenv()

# --- sync логгер для раннего старта ---
boot_log = Log()
if os.environ.get("RUN_MAIN") == "true" or multiprocessing.current_process().name == "MainProcess":
    boot_log.log_info_sync(target="startup", message="Импорты main.py выполнены")

# ────────────── Lifespan ──────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

    # Инициализация БД: таблицы, админ, стартовый каталог
    await init_db()
    boot_log.log_info_sync(target="startup", message="База инициализирована")

    app.state.log = Log()
    await app.state.log.log_info(target="startup", message="Async Log инициализирован")

    yield

    # shutdown
    await app.state.log.log_info(target="shutdown", message="Остановка приложения")
    await app.state.log.shutdown()
    await close_db()
    boot_log.log_info_sync(target="shutdown", message="Log корректно завершён")

# ────────────── Создаём FastAPI приложение ──────────────
app = FastAPI(title="Order Desk API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# DB middleware для request.state.db
app.add_middleware(DBSessionMiddleware)

@app.get("/")
def read_root():
    return {"message": "Order Desk API"}

# ────────────── Подключение роутов ──────────────
app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
app.include_router(product.router, prefix="/product", tags=["product"])
app.include_router(moderator.router, prefix="/moderator", tags=["moderator"])
app.include_router(lead.router, prefix="/lead", tags=["lead"])
app.include_router(order.router, prefix="/order", tags=["order"])
app.include_router(setting.router, prefix="/settings", tags=["settings"])

# ────────────── Запуск uvicorn ──────────────
def run():
    boot_log.log_info_sync(target="startup", message="Запуск uvicorn.run")
    uvicorn.run(
        "orderdesk.main:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
        log_level="info",
        reload=os.environ.get("RELOAD", "0") == "1",
    )

if __name__ == "__main__":
    run()
