# orderdesk/middleware/db_middleware.py

from starlette.types import ASGIApp, Receive, Scope, Send
from orderdesk.utils.database import AsyncSessionLocal


class DBSessionMiddleware:
    """
    Сессия БД на каждый HTTP-запрос: request.state.db.
    Незакоммиченные изменения откатываются, если обработчик упал.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        session = AsyncSessionLocal()
        state["db"] = session
        try:
            await self.app(scope, receive, send)
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
