# petcare/odata/query.py

"""
OData 시스템 쿼리 옵션 처리 모듈입니다.

지원: $top, $skip, $count, $select, $orderby, $format(json)
미지원: $filter, $expand, $search, $apply -> NotImplementedODataError (501)
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from petcare.core.exceptions import BadRequestError, NotImplementedODataError
from petcare.odata.registry import EntitySet, PropertyInfo

UNSUPPORTED_OPTIONS = ("$filter", "$expand", "$search", "$apply", "$levels", "$compute")


def _split_csv(raw: str) -> List[str]:
    """쉼표로 구분된 값을 공백을 제거하여 분리합니다."""
    return [s.strip() for s in raw.split(",") if s and s.strip()]


def reject_unsupported(query_params: Mapping[str, str]) -> None:
    """이 서비스가 처리하지 않는 시스템 쿼리 옵션이 있으면 501 오류를 발생시킵니다."""
    for option in UNSUPPORTED_OPTIONS:
        if option in query_params:
            raise NotImplementedODataError(f"System query option '{option}' is not supported")


def check_format(fmt: Optional[str], allowed: Sequence[str] = ("json",)) -> None:
    if fmt is None:
        return
    # "application/json;odata.metadata=minimal" 같은 형식도 허용합니다.
    base = fmt.split(";", 1)[0].strip().lower()
    if base not in allowed and base.rsplit("/", 1)[-1] not in allowed:
        raise NotImplementedODataError(f"$format '{fmt}' is not supported")


def parse_select(entity_set: EntitySet, raw: Optional[str]) -> Optional[List[PropertyInfo]]:
    """
    $select 값을 속성 목록으로 변환합니다. 없거나 '*'이면 None(전체 속성)을 반환합니다.
    """
    if raw is None:
        return None
    names = _split_csv(raw)
    if not names or "*" in names:
        return None
    selected: List[PropertyInfo] = []
    for name in names:
        prop = entity_set.get_property(name)
        if prop not in selected:
            selected.append(prop)
    return selected


def parse_orderby(entity_set: EntitySet, raw: Optional[str]) -> List[Tuple[PropertyInfo, bool]]:
    """
    $orderby 값을 (속성, 내림차순 여부) 목록으로 변환합니다.
    예: "PetName desc, Weight" -> [(PetName, True), (Weight, False)]
    """
    if raw is None:
        return []
    order: List[Tuple[PropertyInfo, bool]] = []
    for item in _split_csv(raw):
        parts = item.split()
        if len(parts) > 2:
            raise BadRequestError(f"Invalid $orderby item '{item}'")
        descending = False
        if len(parts) == 2:
            direction = parts[1].lower()
            if direction not in ("asc", "desc"):
                raise BadRequestError(f"Invalid $orderby direction '{parts[1]}'")
            descending = direction == "desc"
        order.append((entity_set.get_property(parts[0]), descending))
    return order


@dataclass
class QueryOptions:
    """컬렉션 조회 요청의 시스템 쿼리 옵션입니다."""
    top: Optional[int] = None
    skip: int = 0
    count: bool = False
    select: Optional[List[PropertyInfo]] = None
    order_by: List[Tuple[PropertyInfo, bool]] = field(default_factory=list)

    @property
    def is_plain(self) -> bool:
        """페이징/정렬 옵션이 없는 '전체 조회' 요청인지 여부."""
        return self.top is None and not self.skip and not self.order_by

    def order_spec(self) -> List[Tuple[str, bool]]:
        return [(prop.attribute, descending) for prop, descending in self.order_by]
