"""
Middleware для CORS и pre-flight запросов
"""
import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .routes.submissions import MSG_INTERNAL_ERROR

logger = logging.getLogger(__name__)


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Проставляет CORS-заголовки на каждый ответ (включая ошибки)
    и отвечает пустым 200 на любой OPTIONS, не доходя до роутеров.
    Непойманное исключение превращается в 500 {"message": ...} с теми же заголовками.
    """

    def __init__(self, app, allow_origin: str, allow_methods: str, allow_headers: str):
        super().__init__(app)
        self.cors_headers = {
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": allow_methods,
            "Access-Control-Allow-Headers": allow_headers,
        }

    async def dispatch(self, request: Request, call_next):
        # Pre-flight от браузера
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.cors_headers)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Необработанная ошибка: %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=500,
                content={"message": MSG_INTERNAL_ERROR},
                headers=self.cors_headers
            )

        response.headers.update(self.cors_headers)
        return response
