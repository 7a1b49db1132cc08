# petcare/odata/registry.py

"""
OData 엔티티셋 레지스트리 모듈입니다.

엔티티셋 이름(예: "Pets")을 테이블 모델과 저장소(CRUD) 인스턴스에 연결합니다.
EDM 속성 이름은 DB 컬럼 이름(예: "PetId")을, 파이썬 속성 이름은 모델 필드(예: "pet_id")를 사용합니다.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Type

from sqlalchemy import Column
from sqlalchemy import inspect as sa_inspect
from sqlmodel import SQLModel

from petcare.core.crud_base import CRUDBase
from petcare.core.exceptions import BadRequestError, ResourceNotFoundError
from petcare.domains.centers import crud as centers_crud
from petcare.domains.docs import crud as docs_crud
from petcare.domains.pets import crud as pets_crud


@dataclass(frozen=True, eq=False)
class PropertyInfo:
    """엔티티 타입의 구조 속성(structural property) 정보입니다."""
    name: str          # EDM 속성 이름 (컬럼 이름)
    attribute: str     # 모델 속성 이름
    column: Column
    is_key: bool = False


@dataclass
class EntitySet:
    """
    OData 엔티티셋 하나를 나타냅니다.

    Attributes
    ----------
    name : str
        엔티티셋 이름 (URL 경로에 사용)
    crud : CRUDBase
        이 엔티티셋의 저장소
    media_attribute : str, optional
        미디어 스트림($value)으로 노출할 바이너리 속성
    media_type_attribute : str, optional
        미디어 스트림의 Content-Type을 보관하는 속성
    """
    name: str
    crud: CRUDBase
    media_attribute: Optional[str] = None
    media_type_attribute: Optional[str] = None
    properties: List[PropertyInfo] = field(init=False)

    def __post_init__(self) -> None:
        mapper = sa_inspect(self.model)
        self.properties = [
            PropertyInfo(
                name=column_attr.columns[0].name,
                attribute=column_attr.key,
                column=column_attr.columns[0],
                is_key=column_attr.columns[0].primary_key,
            )
            for column_attr in mapper.column_attrs
            # 미디어 스트림 속성은 구조 속성으로 노출하지 않습니다.
            if column_attr.key != self.media_attribute
        ]
        self._by_name: Dict[str, PropertyInfo] = {p.name: p for p in self.properties}

    @property
    def model(self) -> Type[SQLModel]:
        return self.crud.model

    @property
    def entity_type(self) -> str:
        return self.model.__name__

    @property
    def has_stream(self) -> bool:
        return self.media_attribute is not None

    @property
    def key(self) -> PropertyInfo:
        return next(p for p in self.properties if p.is_key)

    def get_property(self, name: str) -> PropertyInfo:
        """EDM 이름으로 속성을 찾습니다. 없으면 BadRequestError를 발생시킵니다."""
        try:
            return self._by_name[name]
        except KeyError:
            raise BadRequestError(
                f"Property '{name}' does not exist in type '{self.entity_type}'"
            ) from None


class ODataRegistry:
    """엔티티셋 이름으로 EntitySet을 조회하는 레지스트리입니다."""

    def __init__(self, entity_sets: List[EntitySet]):
        self._sets: Dict[str, EntitySet] = {es.name: es for es in entity_sets}

    def __iter__(self) -> Iterator[EntitySet]:
        return iter(self._sets.values())

    def __len__(self) -> int:
        return len(self._sets)

    def get(self, name: str) -> EntitySet:
        try:
            return self._sets[name]
        except KeyError:
            raise ResourceNotFoundError(f"Entity set '{name}' not found") from None


registry = ODataRegistry([
    EntitySet("Pets", pets_crud.pet),
    EntitySet("PetServices", centers_crud.pet_service),
    EntitySet(
        "Documents", docs_crud.document,
        media_attribute="content", media_type_attribute="doc_file_type",
    ),
    EntitySet("Managers", centers_crud.manager),
    EntitySet("PetOwners", pets_crud.pet_owner),
    EntitySet("PetCareCenters", centers_crud.pet_care_center),
    EntitySet("PetOwnerPets", pets_crud.pet_owner_pets),
    EntitySet("PetCareCenterImages", centers_crud.pet_care_center_images),
    EntitySet("PetCareCenterServices", centers_crud.pet_care_center_services),
    EntitySet("PetCareCenterPets", centers_crud.pet_care_center_pets),
    EntitySet("PetCareCenterBusinessHours", centers_crud.pet_care_center_business_hours),
])
