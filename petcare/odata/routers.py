# petcare/odata/routers.py

"""
OData v4 서비스의 API 엔드포인트를 정의하는 모듈입니다.

모든 엔티티셋은 레지스트리를 통해 하나의 라우터로 처리됩니다.
    GET    /                      서비스 문서 (JSON 또는 AtomPub XML)
    GET    /$metadata             CSDL 메타데이터 문서
    GET    /{Set}                 컬렉션 조회 ($top, $skip, $count, $select, $orderby)
    GET    /{Set}/$count          전체 개수 (text/plain)
    GET    /{Set}({key})          단일 엔티티 조회
    POST   /{Set}                 엔티티 생성
    PATCH  /{Set}({key})          부분 업데이트
    PUT    /{Set}({key})          전체 교체
    DELETE /{Set}({key})          삭제
    GET    /{Set}({key})/$value   미디어 스트림 조회 (Documents)
    PUT    /{Set}({key})/$value   미디어 스트림 교체 (Documents)
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from petcare.core import dependencies as deps
from petcare.core.config import settings
from petcare.core.exceptions import BadRequestError, UnsupportedMediaTypeError
from petcare.odata import metadata as odata_metadata
from petcare.odata import query as odata_query
from petcare.odata import serializer
from petcare.odata.registry import EntitySet, PropertyInfo, registry

logger = logging.getLogger(__name__)

ODATA_JSON = "application/json;odata.metadata=minimal"
SUPPORTED_BODY_TYPES = ["application/json"]
RESOURCE_PATTERN = re.compile(r"^(?P<set>\w+)(?:\((?P<key>[^)]*)\))?$")

router = APIRouter(
    tags=["OData"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 내부 도우미
# =============================================================================
def _service_root(request: Request) -> str:
    return str(request.base_url).rstrip("/") + settings.odata_root


def _resolve(resource: str) -> Tuple[EntitySet, Optional[int]]:
    """`Pets` 또는 `Pets(5)` 형식의 경로 세그먼트를 엔티티셋과 키로 분해합니다."""
    match = RESOURCE_PATTERN.match(resource)
    if match is None:
        raise BadRequestError(f"Invalid resource path '{resource}'")
    entity_set = registry.get(match.group("set"))
    raw_key = match.group("key")
    if raw_key is None:
        return entity_set, None
    return entity_set, serializer.parse_key(entity_set, raw_key)


def _require_key(entity_set: EntitySet, key: Optional[int]) -> int:
    if key is None:
        raise BadRequestError(f"A key is required to address a single {entity_set.entity_type}")
    return key


def _require_collection(entity_set: EntitySet, key: Optional[int]) -> None:
    if key is not None:
        raise BadRequestError(f"The operation is only allowed on the entity set '{entity_set.name}'")


def _ensure_media(entity_set: EntitySet) -> None:
    if not entity_set.has_stream:
        raise BadRequestError(f"'{entity_set.entity_type}' is not a media entity type")


def _context(request: Request, entity_set: EntitySet, select: Optional[List[PropertyInfo]], single: bool) -> str:
    target = entity_set.name
    if select is not None:
        target += "(" + ",".join(p.name for p in select) + ")"
    if single:
        target += "/$entity"
    return f"{_service_root(request)}/$metadata#{target}"


def _odata_response(content: Dict[str, Any], status_code: int = status.HTTP_200_OK, headers=None) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=headers, media_type=ODATA_JSON)


async def _read_json_body(request: Request, entity_set: EntitySet) -> Dict[str, Any]:
    content_type = request.headers.get("content-type")
    if not content_type or content_type.split(";", 1)[0].strip().lower() not in SUPPORTED_BODY_TYPES:
        raise UnsupportedMediaTypeError(content_type, SUPPORTED_BODY_TYPES)
    payload = serializer.parse_json_body(await request.body())
    return serializer.deserialize_entity(entity_set, payload)


def _next_link(request: Request, options: odata_query.QueryOptions, page_size: int) -> str:
    params = {"$skip": str(options.skip + page_size)}
    url = request.url.remove_query_params("$top")
    if options.top is not None:
        params["$top"] = str(options.top - page_size)
    return str(url.include_query_params(**params))


# =============================================================================
# 2. 서비스 문서 및 메타데이터
# =============================================================================
@router.get("/", summary="서비스 문서 조회")
async def read_service_document(
    request: Request,
    format_: Optional[str] = Query(None, alias="$format"),
):
    """
    엔티티셋 목록을 담은 서비스 문서를 반환합니다.
    `Accept: application/xml` 또는 `$format=xml`이면 AtomPub 형식으로 반환합니다.
    """
    odata_query.check_format(format_, allowed=("json", "xml"))
    accept = request.headers.get("accept", "")
    wants_xml = (format_ is not None and "xml" in format_.lower()) or (
        format_ is None and "xml" in accept and "json" not in accept
    )
    if wants_xml:
        body = odata_metadata.build_service_document_xml(registry, _service_root(request), settings.APP_NAME)
        return Response(content=body, media_type="application/xml")
    return _odata_response(odata_metadata.build_service_document_json(registry, _service_root(request)))


@router.get("/$metadata", summary="메타데이터(CSDL) 문서 조회")
async def read_metadata():
    """모든 엔티티 타입과 엔티티셋을 기술하는 CSDL XML 문서를 반환합니다."""
    body = odata_metadata.build_metadata_document(registry, settings.ODATA_NAMESPACE)
    return Response(content=body, media_type="application/xml")


# =============================================================================
# 3. 엔티티셋 엔드포인트
# =============================================================================
@router.get("/{resource}/$count", summary="엔티티 개수 조회")
async def read_count(
    request: Request,
    resource: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    odata_query.reject_unsupported(request.query_params)
    entity_set, key = _resolve(resource)
    _require_collection(entity_set, key)
    total = await entity_set.crud.count(db)
    return PlainTextResponse(str(total))


@router.get("/{resource}/$value", summary="미디어 스트림 조회")
async def read_media(
    resource: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """미디어 엔티티의 바이너리 내용을 저장된 Content-Type으로 반환합니다. 내용이 없으면 204."""
    entity_set, key = _resolve(resource)
    _ensure_media(entity_set)
    db_obj = await entity_set.crud.get_or_404(db, _require_key(entity_set, key))
    content = getattr(db_obj, entity_set.media_attribute)
    # None과 빈 바이트 모두 내용 없음으로 처리합니다.
    if not content:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    media_type = getattr(db_obj, entity_set.media_type_attribute) or "application/octet-stream"
    return Response(content=content, media_type=media_type)


@router.put("/{resource}/$value", status_code=status.HTTP_204_NO_CONTENT, summary="미디어 스트림 교체")
async def update_media(
    request: Request,
    resource: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """요청 본문을 미디어 내용으로, 요청 Content-Type을 미디어 타입으로 저장합니다."""
    entity_set, key = _resolve(resource)
    _ensure_media(entity_set)
    db_obj = await entity_set.crud.get_or_404(db, _require_key(entity_set, key))
    content_type = request.headers.get("content-type") or "application/octet-stream"
    await entity_set.crud.update(
        db,
        db_obj=db_obj,
        obj_in={
            entity_set.media_attribute: await request.body(),
            entity_set.media_type_attribute: content_type,
        },
    )
    logger.info("Stored %s media stream for key %s (%s)", entity_set.entity_type, key, content_type)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{resource}", summary="컬렉션 또는 단일 엔티티 조회")
async def read_resource(
    request: Request,
    resource: str,
    top: Optional[int] = Query(None, alias="$top", ge=0, le=serializer.EDM_INT32_MAX),
    skip: int = Query(0, alias="$skip", ge=0, le=serializer.EDM_INT32_MAX),
    count: bool = Query(False, alias="$count"),
    select: Optional[str] = Query(None, alias="$select"),
    orderby: Optional[str] = Query(None, alias="$orderby"),
    format_: Optional[str] = Query(None, alias="$format"),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    엔티티셋 컬렉션 또는 키로 지정된 단일 엔티티를 조회합니다.
    - `$top`, `$skip`: 페이징 (한 응답은 최대 ODATA_MAX_PAGE_SIZE건)
    - `$count=true`: 페이징 전 전체 개수를 `@odata.count`로 포함
    - `$select`: 반환할 속성 (키는 항상 포함)
    - `$orderby`: `속성 [asc|desc]`를 쉼표로 구분
    """
    odata_query.reject_unsupported(request.query_params)
    odata_query.check_format(format_)
    entity_set, key = _resolve(resource)
    selected = odata_query.parse_select(entity_set, select)

    if key is not None:
        db_obj = await entity_set.crud.get_or_404(db, key)
        body = {"@odata.context": _context(request, entity_set, selected, single=True)}
        body.update(serializer.serialize_entity(entity_set, db_obj, selected))
        return _odata_response(body)

    options = odata_query.QueryOptions(
        top=top,
        skip=skip,
        count=count,
        select=selected,
        order_by=odata_query.parse_orderby(entity_set, orderby),
    )
    page_size = settings.ODATA_MAX_PAGE_SIZE
    if options.top is not None:
        page_size = min(options.top, page_size)

    if options.is_plain:
        # get_all은 순서를 보장하지 않으므로 페이지 분할 전에 키 순서로 정렬합니다.
        key_attribute = entity_set.crud.key_attribute
        rows = sorted(await entity_set.crud.get_all(db), key=lambda row: getattr(row, key_attribute))
    else:
        # 다음 페이지 존재 여부를 알기 위해 한 건을 더 조회합니다.
        rows = await entity_set.crud.query(
            db, order_by=options.order_spec(), skip=options.skip, limit=page_size + 1
        )

    body = {"@odata.context": _context(request, entity_set, selected, single=False)}
    if options.count:
        body["@odata.count"] = await entity_set.crud.count(db)
    body["value"] = [serializer.serialize_entity(entity_set, row, selected) for row in rows[:page_size]]
    if len(rows) > page_size and (options.top is None or options.top > page_size):
        body["@odata.nextLink"] = _next_link(request, options, page_size)
    return _odata_response(body)


@router.post("/{resource}", status_code=status.HTTP_201_CREATED, summary="엔티티 생성")
async def create_resource(
    request: Request,
    resource: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    EDM 속성 이름의 JSON 객체로 새 엔티티를 생성합니다.
    생성된 엔티티와 `Location` 헤더를 201 응답으로 반환합니다.
    """
    entity_set, key = _resolve(resource)
    _require_collection(entity_set, key)
    obj_in = await _read_json_body(request, entity_set)
    db_obj = await entity_set.crud.create(db, obj_in=obj_in)

    new_key = getattr(db_obj, entity_set.key.attribute)
    logger.info("Created %s with key %s", entity_set.entity_type, new_key)
    location = f"{_service_root(request)}/{entity_set.name}({new_key})"
    body = {"@odata.context": _context(request, entity_set, None, single=True)}
    body.update(serializer.serialize_entity(entity_set, db_obj))
    return _odata_response(body, status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.patch("/{resource}", summary="엔티티 부분 업데이트")
async def patch_resource(
    request: Request,
    resource: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """전달된 속성만 갱신합니다."""
    entity_set, key = _resolve(resource)
    key = _require_key(entity_set, key)
    obj_in = await _read_json_body(request, entity_set)
    obj_in.pop(entity_set.key.attribute, None)
    db_obj = await entity_set.crud.get_or_404(db, key)
    db_obj = await entity_set.crud.update(db, db_obj=db_obj, obj_in=obj_in)

    body = {"@odata.context": _context(request, entity_set, None, single=True)}
    body.update(serializer.serialize_entity(entity_set, db_obj))
    return _odata_response(body)


@router.put("/{resource}", summary="엔티티 전체 교체")
async def replace_resource(
    request: Request,
    resource: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """키를 제외한 모든 속성을 교체합니다. 전달되지 않은 속성은 null이 됩니다."""
    entity_set, key = _resolve(resource)
    key = _require_key(entity_set, key)
    obj_in = await _read_json_body(request, entity_set)
    db_obj = await entity_set.crud.get_or_404(db, key)
    if entity_set.has_stream:
        # 미디어 스트림은 $value로만 교체합니다. 본문에 Content-Type이 없으면 기존 값을 유지합니다.
        obj_in[entity_set.media_attribute] = getattr(db_obj, entity_set.media_attribute)
        obj_in.setdefault(entity_set.media_type_attribute, getattr(db_obj, entity_set.media_type_attribute))
    db_obj = await entity_set.crud.replace(db, db_obj=db_obj, obj_in=obj_in)

    body = {"@odata.context": _context(request, entity_set, None, single=True)}
    body.update(serializer.serialize_entity(entity_set, db_obj))
    return _odata_response(body)


@router.delete("/{resource}", status_code=status.HTTP_204_NO_CONTENT, summary="엔티티 삭제")
async def delete_resource(
    resource: str,
    db: AsyncSession = Depends(deps.get_db_session),
):
    entity_set, key = _resolve(resource)
    key = _require_key(entity_set, key)
    await entity_set.crud.delete(db, id=key)
    logger.info("Deleted %s with key %s", entity_set.entity_type, key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
