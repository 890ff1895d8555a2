# orderdesk/services/setting.py

from sqlalchemy.future import select
from fastapi import Request

from orderdesk.models.setting import Setting as SettingModel, SETTINGS_ID
from orderdesk.schemas.setting import CourierConfig, SettingsResponse


async def _get_row(request: Request) -> SettingModel:
    """Строка настроек; создаётся при первом обращении."""
    db = request.state.db
    result = await db.execute(select(SettingModel).where(SettingModel.id == SETTINGS_ID))
    row = result.scalar_one_or_none()
    if row is None:
        row = SettingModel(id=SETTINGS_ID, courier_config=CourierConfig().model_dump(), logo_url=None)
        db.add(row)
        await db.commit()
    return row


async def read_settings_service(request: Request) -> SettingsResponse:
    row = await _get_row(request)
    return SettingsResponse(
        courier_config=CourierConfig(**(row.courier_config or {})),
        logo_url=row.logo_url,
    )


async def read_courier_config_service(request: Request) -> CourierConfig:
    return (await read_settings_service(request)).courier_config


async def update_courier_config_service(config: CourierConfig, request: Request) -> SettingsResponse:
    """
    Полная замена конфига курьера.
    """
    db = request.state.db
    log = request.app.state.log

    row = await _get_row(request)
    row.courier_config = config.model_dump()
    db.add(row)
    await db.commit()

    await log.log_info("settings", "Конфиг курьера сохранён", {"base_url": config.base_url})
    return await read_settings_service(request)


async def update_logo_service(logo_url: str | None, request: Request) -> SettingsResponse:
    """
    Установка или сброс (None) логотипа.
    """
    db = request.state.db
    log = request.app.state.log

    row = await _get_row(request)
    row.logo_url = logo_url or None
    db.add(row)
    await db.commit()

    await log.log_info("settings", "Логотип обновлён", {"logo_url": row.logo_url})
    return await read_settings_service(request)
