"""
API роутер для заявок на услуги
"""
import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field, StrictStr, ValidationError
from starlette.concurrency import run_in_threadpool

from ..database import StoreError, SubmissionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["submissions"])

SUBMIT_PATH = "/submit-service"

# Тексты ответов (контракт с фронтендом)
MSG_SUCCESS = "Solicitud recibida con éxito!"
MSG_METHOD_NOT_ALLOWED = "Método no permitido"
MSG_BAD_REQUEST = "Error al decodificar la solicitud JSON"
MSG_INTERNAL_ERROR = "Error interno del servidor al guardar la solicitud"
MSG_WELCOME = "Bienvenido a la API de servicios. Usa /submit-service para enviar datos."


# ==================== Pydantic Schemas ====================

class SubmissionRequest(BaseModel):
    """Тело заявки из формы (внешние имена полей - на испанском)"""

    name: StrictStr = Field(..., alias="nombre")
    phone: StrictStr = Field(..., alias="telefono")
    service: StrictStr = Field(..., alias="servicio")


class MessageResponse(BaseModel):
    message: str


# ==================== Dependencies ====================

def get_store(request: Request) -> SubmissionStore:
    """
    Dependency для получения хранилища заявок
    Использование:
        @router.post("/items")
        def create_item(store: SubmissionStore = Depends(get_store)):
            ...
    """
    return request.app.state.store


# ==================== Endpoints ====================

@router.post(SUBMIT_PATH, response_model=MessageResponse)
async def submit_service(request: Request, store: SubmissionStore = Depends(get_store)):
    """Сохранение заявки на услугу"""
    # Тело читается как JSON при любом Content-Type
    body = await request.body()
    try:
        data = SubmissionRequest.model_validate(json.loads(body))
    except ValidationError as e:
        logger.info("Некорректные поля заявки: %s", [(err["loc"], err["type"]) for err in e.errors()])
        return JSONResponse(status_code=400, content={"message": MSG_BAD_REQUEST})
    except ValueError as e:
        logger.info("Тело заявки не является JSON: %s", e)
        return JSONResponse(status_code=400, content={"message": MSG_BAD_REQUEST})

    logger.info(
        "Заявка на услугу '%s': имя='%s', телефон='%s'",
        data.service, data.name, data.phone
    )

    try:
        await run_in_threadpool(store.insert, name=data.name, phone=data.phone, service=data.service)
    except StoreError:
        logger.exception("Ошибка сохранения заявки в БД")
        return JSONResponse(status_code=500, content={"message": MSG_INTERNAL_ERROR})

    return {"message": MSG_SUCCESS}


def submit_service_method_not_allowed(request: Request):
    """Любой метод кроме POST"""
    return JSONResponse(status_code=405, content={"message": MSG_METHOD_NOT_ALLOWED})


def default_route(request: Request):
    """Все остальные пути - приветствие (статус 200 оставлен для совместимости)"""
    return PlainTextResponse(MSG_WELCOME)


# Без списка методов маршрут принимает любой метод, в том числе TRACE и нестандартные.
# Порядок важен: POST выше перехватывает только POST на SUBMIT_PATH.
router.add_route(SUBMIT_PATH, submit_service_method_not_allowed, include_in_schema=False)
router.add_route("/{path:path}", default_route, include_in_schema=False)
