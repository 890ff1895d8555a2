# orderdesk/routes/setting.py

from fastapi import APIRouter, Depends, Request
from orderdesk.schemas.setting import CourierConfig, LogoUpdate, SettingsResponse
from orderdesk.services.setting import (
    read_settings_service,
    update_courier_config_service,
    update_logo_service,
)
from orderdesk.routes.auth import require_admin

router = APIRouter()


@router.get(
    "/",
    response_model=SettingsResponse,
    summary="Настройки (админ)",
)
async def read_settings(request: Request, _=Depends(require_admin)):
    try:
        return await read_settings_service(request)
    except Exception as e:
        await request.app.state.log.log_error("settings", f"Ошибка чтения настроек: {str(e)}")
        raise


@router.put(
    "/courier",
    response_model=SettingsResponse,
    summary="Сохранить конфиг курьера Steadfast",
    responses={
        200: {"description": "Конфиг сохранён"},
        403: {"description": "Только администратор"},
    },
)
async def update_courier_config(config: CourierConfig, request: Request, _=Depends(require_admin)):
    try:
        return await update_courier_config_service(config, request)
    except Exception as e:
        await request.app.state.log.log_error("settings", f"Ошибка сохранения конфига: {str(e)}")
        raise


@router.put(
    "/logo",
    response_model=SettingsResponse,
    summary="Установить или сбросить логотип",
)
async def update_logo(body: LogoUpdate, request: Request, _=Depends(require_admin)):
    try:
        return await update_logo_service(body.logo_url, request)
    except Exception as e:
        await request.app.state.log.log_error("settings", f"Ошибка обновления логотипа: {str(e)}")
        raise
