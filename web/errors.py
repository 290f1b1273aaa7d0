"""
예외 핸들러

도메인 예외를 HTTP 응답으로 변환. 응답 본문은 공통 envelope.
- ValidationError → 400
- NotFoundError → 404
- 요청 스키마 검증 실패 → 422
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, data: object = None) -> JSONResponse:
    """실패 envelope 응답"""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": data, "message": message},
    )


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.error(f"요청 검증 실패: {request.method} {request.url.path} ({exc})")
    return error_response(400, str(exc))


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info(f"대상 없음: {request.method} {request.url.path} ({exc})")
    return error_response(404, str(exc))


async def handle_request_validation(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"요청 스키마 오류: {request.method} {request.url.path} ({len(errors)}건)")
    return error_response(422, "request validation failed", data=errors)


def register_exception_handlers(app: FastAPI) -> None:
    """앱에 예외 핸들러 등록"""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
