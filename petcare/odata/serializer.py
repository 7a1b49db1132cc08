# petcare/odata/serializer.py

"""
엔티티 <-> OData JSON 변환 모듈입니다.

- 응답: 모델 속성 값을 EDM 이름의 JSON 값으로 변환합니다.
  (Enum -> 멤버 이름, timedelta -> ISO-8601 기간, time/date/datetime -> ISO 문자열, bytes -> base64)
- 요청: EDM 이름의 JSON 객체를 모델 속성 이름의 dict로 변환합니다. 값 검증은 모델 검증에 맡깁니다.
"""

import base64
import enum
import json
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, Optional

from sqlmodel import SQLModel

from petcare.core.exceptions import BadRequestError, MalformedRequestError
from petcare.core.types import duration_to_iso
from petcare.odata.registry import EntitySet, PropertyInfo

# 키와 $top/$skip은 Edm.Int32 범위를 벗어날 수 없습니다.
EDM_INT32_MIN = -2147483648
EDM_INT32_MAX = 2147483647


def to_json_value(value: Any) -> Any:
    """속성 값을 JSON으로 직렬화 가능한 OData 표현으로 변환합니다."""
    if value is None:
        return None
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, timedelta):
        return duration_to_iso(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.urlsafe_b64encode(value).decode("ascii")
    return value


def serialize_entity(
    entity_set: EntitySet,
    obj: SQLModel,
    select: Optional[Iterable[PropertyInfo]] = None,
) -> Dict[str, Any]:
    """
    엔티티 하나를 EDM 속성 이름의 dict로 변환합니다.
    select가 주어지면 해당 속성(과 키)만 포함합니다.
    """
    properties = entity_set.properties if select is None else _with_key(entity_set, select)
    data = {p.name: to_json_value(getattr(obj, p.attribute)) for p in properties}
    if entity_set.has_stream:
        content_type = getattr(obj, entity_set.media_type_attribute, None)
        data["@odata.mediaContentType"] = content_type or "application/octet-stream"
    return data


def _with_key(entity_set: EntitySet, select: Iterable[PropertyInfo]) -> list:
    selected = list(select)
    if not any(p.is_key for p in selected):
        selected.insert(0, entity_set.key)
    return selected


def parse_json_body(body: bytes) -> Dict[str, Any]:
    """요청 본문을 JSON 객체로 파싱합니다. 객체가 아니면 MalformedRequestError를 발생시킵니다."""
    try:
        payload = json.loads(body or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRequestError(f"JSON parse error: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedRequestError("Request body must be a JSON object")
    return payload


def deserialize_entity(entity_set: EntitySet, payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    EDM 이름의 JSON 객체를 모델 속성 dict로 변환합니다.
    '@'가 포함된 키(주석, 예: "@odata.type")는 무시하고, 알 수 없는 속성은 BadRequestError를 발생시킵니다.
    """
    data: Dict[str, Any] = {}
    for name, value in payload.items():
        if "@" in name:
            continue
        prop = entity_set.get_property(name)
        data[prop.attribute] = value
    return data


def parse_key(entity_set: EntitySet, raw_key: str) -> int:
    """
    키 리터럴을 파싱합니다. `5`와 `PetId=5` 형식을 모두 허용합니다.
    """
    literal = raw_key.strip()
    if "=" in literal:
        name, _, literal = literal.partition("=")
        if name.strip() != entity_set.key.name:
            raise BadRequestError(f"Key property '{name.strip()}' does not match '{entity_set.key.name}'")
        literal = literal.strip()
    try:
        key = int(literal)
    except ValueError:
        raise BadRequestError(f"Invalid key literal '{raw_key}' for {entity_set.entity_type}") from None
    if not EDM_INT32_MIN <= key <= EDM_INT32_MAX:
        raise BadRequestError(f"Key literal '{raw_key}' is out of range for Edm.Int32")
    return key
