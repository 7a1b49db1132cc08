# petcare/core/exceptions.py

"""
애플리케이션 전역 예외와 예외 처리기(exception handler)를 정의하는 모듈입니다.

모든 오류 응답은 동일한 JSON 형태(ApiError)로 반환됩니다.
    {"timestamp": "...", "status": 400, "message": "...", "details": ["..."]}

예외 종류별 상태 코드와 메시지는 아래 처리기 함수에서 고정적으로 매핑합니다.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# =============================================================================
# 도메인 예외
# =============================================================================
class PetCareError(Exception):
    """애플리케이션 예외의 기본 클래스입니다."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(PetCareError):
    """요청한 엔티티셋 또는 키에 해당하는 레코드가 없을 때 발생합니다."""


class ResourceExistsError(PetCareError):
    """이미 존재하는 키로 레코드를 생성하려 할 때 발생합니다."""


class BadRequestError(PetCareError):
    """잘못된 요청(알 수 없는 속성, 잘못된 키 등)일 때 발생합니다."""


class MalformedRequestError(PetCareError):
    """요청 본문이 올바른 JSON 객체가 아닐 때 발생합니다."""


class UnsupportedMediaTypeError(PetCareError):
    """지원하지 않는 Content-Type으로 요청 본문이 전달되었을 때 발생합니다."""

    def __init__(self, content_type: Optional[str], supported: Iterable[str]):
        self.content_type = content_type
        self.supported = list(supported)
        super().__init__(f"{content_type} media type is not supported")


class NotImplementedODataError(PetCareError):
    """이 서비스가 구현하지 않는 OData 기능($filter, $expand 등)을 요청했을 때 발생합니다."""


# =============================================================================
# 오류 응답 모델
# =============================================================================
class ApiError(BaseModel):
    """모든 오류 응답에 사용되는 공통 JSON 봉투(envelope)입니다."""
    timestamp: datetime = Field(default_factory=datetime.now, description="오류 발생 시각")
    status: int = Field(..., description="HTTP 상태 코드")
    message: str = Field(..., description="오류 요약")
    details: List[str] = Field(default_factory=list, description="상세 오류 목록")


def build_response(err: ApiError) -> JSONResponse:
    """ApiError를 같은 상태 코드의 JSON 응답으로 변환합니다."""
    return JSONResponse(status_code=err.status, content=err.model_dump(mode="json"))


def _error(status_code: int, message: str, details: List[str]) -> JSONResponse:
    return build_response(ApiError(status=status_code, message=message, details=details))


# =============================================================================
# 예외 처리기
# =============================================================================
async def handle_unsupported_media_type(request: Request, exc: UnsupportedMediaTypeError) -> JSONResponse:
    detail = (
        f"{exc.content_type} media type is not supported. "
        f"Supported media types are {', '.join(exc.supported)}"
    )
    logger.warning("Unsupported media type on %s %s: %s", request.method, request.url.path, exc.content_type)
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON", [detail])


async def handle_malformed_request(request: Request, exc: MalformedRequestError) -> JSONResponse:
    logger.warning("Malformed JSON on %s %s: %s", request.method, request.url.path, exc.message)
    return _error(status.HTTP_400_BAD_REQUEST, "Malformed JSON request", [exc.message])


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    details = [
        f"{'.'.join(str(part) for part in error['loc'])} : {error['msg']}"
        for error in exc.errors()
    ]
    logger.warning("Validation failed on %s %s: %s", request.method, request.url.path, details)
    return _error(status.HTTP_400_BAD_REQUEST, "Validation Errors", details)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    FastAPI 요청 검증 오류를 세 가지로 구분합니다.
    - 필수 파라미터 누락 -> Missing Parameters
    - 쿼리/경로/헤더 파라미터 타입 불일치 -> Mismatch Type
    - 그 외(본문 검증 실패) -> Validation Errors
    """
    errors = exc.errors()
    param_locations = ("query", "path", "header")

    missing = [
        e for e in errors
        if e.get("type") == "missing" and e["loc"] and e["loc"][0] in param_locations
    ]
    if missing:
        details = [f"{e['loc'][-1]} parameter is missing" for e in missing]
        return _error(status.HTTP_400_BAD_REQUEST, "Missing Parameters", details)

    if errors and all(e["loc"] and e["loc"][0] in param_locations for e in errors):
        details = [f"{e['loc'][-1]} : {e['msg']}" for e in errors]
        return _error(status.HTTP_400_BAD_REQUEST, "Mismatch Type", details)

    details = [f"{'.'.join(str(part) for part in e['loc'])} : {e['msg']}" for e in errors]
    return _error(status.HTTP_400_BAD_REQUEST, "Validation Errors", details)


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return _error(status.HTTP_400_BAD_REQUEST, "Constraint Violation", [str(exc.orig)])


async def handle_resource_not_found(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "Resource Not Found", [exc.message])


async def handle_resource_exists(request: Request, exc: ResourceExistsError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, "Resource Exists", [exc.message])


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 라우트를 찾지 못한 경우(404/405)는 "Method Not Found"로 통일합니다.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        detail = f"Could not find the {request.method} method for URL {request.url}"
        return _error(status.HTTP_400_BAD_REQUEST, "Method Not Found", [detail])
    return _error(exc.status_code, str(exc.detail), [str(exc.detail)])


async def handle_not_implemented(request: Request, exc: NotImplementedODataError) -> JSONResponse:
    return _error(status.HTTP_501_NOT_IMPLEMENTED, "Not Implemented", [exc.message])


async def handle_bad_request(request: Request, exc: BadRequestError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, "Error occurred", [exc.message])


async def handle_all(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_400_BAD_REQUEST, "Error occurred", [str(exc)])


def register_exception_handlers(app: FastAPI) -> None:
    """모든 예외 처리기를 FastAPI 애플리케이션에 등록합니다."""
    app.add_exception_handler(UnsupportedMediaTypeError, handle_unsupported_media_type)
    app.add_exception_handler(MalformedRequestError, handle_malformed_request)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(ResourceNotFoundError, handle_resource_not_found)
    app.add_exception_handler(ResourceExistsError, handle_resource_exists)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(NotImplementedODataError, handle_not_implemented)
    app.add_exception_handler(BadRequestError, handle_bad_request)
    app.add_exception_handler(Exception, handle_all)
