# petcare/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 저장소(repository) 클래스 모듈입니다.
OData 라우터는 엔티티셋마다 이 클래스의 인스턴스를 사용해 데이터를 읽고 씁니다.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from petcare.core.exceptions import ResourceExistsError, ResourceNotFoundError

ModelType = TypeVar("ModelType", bound=SQLModel)

# (속성 이름, 내림차순 여부)
OrderSpec = Tuple[str, bool]


def quoted_table_name(model: Type[SQLModel]) -> str:
    """모델 테이블의 스키마 포함, 따옴표 처리된 이름을 반환합니다 (예: "ss_test_bknd_226"."Manager")."""
    table = model.__table__
    if table.schema:
        return f'"{table.schema}"."{table.name}"'
    return f'"{table.name}"'


class CRUDBase(Generic[ModelType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model
        mapper = sa_inspect(model)
        # 컬럼 이름("PetId")이 아닌 모델 속성 이름("pet_id")을 키로 사용합니다.
        self.key_attribute = mapper.get_property_by_column(mapper.primary_key[0]).key

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        키를 기준으로 단일 레코드를 조회합니다.
        """
        return await db.get(self.model, id)

    async def get_or_404(self, db: AsyncSession, id: Any) -> ModelType:
        """키로 레코드를 조회하고, 없으면 ResourceNotFoundError를 발생시킵니다."""
        db_obj = await self.get(db, id)
        if db_obj is None:
            raise ResourceNotFoundError(f"{self.model.__name__} with key {id} not found")
        return db_obj

    async def get_all(self, db: AsyncSession) -> List[ModelType]:
        """
        모든 레코드를 키 순서로 조회합니다.
        """
        statement = select(self.model).order_by(getattr(self.model, self.key_attribute))
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def query(
        self,
        db: AsyncSession,
        *,
        order_by: Sequence[OrderSpec] = (),
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """
        정렬 및 페이징을 적용하여 여러 레코드를 조회합니다.
        정렬 조건이 없으면 키 오름차순으로 정렬합니다.
        """
        statement = select(self.model)

        for attribute, descending in order_by:
            column = getattr(self.model, attribute)
            statement = statement.order_by(column.desc() if descending else column)
        # 동일 값 정렬 시에도 페이지 경계가 안정적이도록 키를 마지막 정렬 조건으로 추가합니다.
        statement = statement.order_by(getattr(self.model, self.key_attribute))

        if skip:
            statement = statement.offset(skip)
        if limit is not None:
            statement = statement.limit(limit)

        result = await db.execute(statement)
        return list(result.scalars().all())

    async def count(self, db: AsyncSession) -> int:
        """테이블의 전체 레코드 수를 반환합니다."""
        statement = select(func.count()).select_from(self.model)
        result = await db.execute(statement)
        return result.scalar_one()

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        새로운 레코드를 생성합니다. 키가 지정되었고 이미 존재하면 ResourceExistsError를 발생시킵니다.
        """
        key = obj_in.get(self.key_attribute)
        if key is not None and await self.get(db, key) is not None:
            raise ResourceExistsError(f"{self.model.__name__} with key {key} already exists")

        db_obj = self.model.model_validate(obj_in)
        return await self._save(db, db_obj)

    async def update(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: Dict[str, Any]
    ) -> ModelType:
        """
        전달된 속성만 갱신합니다 (부분 업데이트).
        """
        # 검증을 위해 기존 값과 합친 뒤 모델 검증을 거칩니다.
        merged = {**db_obj.model_dump(), **obj_in}
        validated = self.model.model_validate(merged)
        for key in obj_in:
            setattr(db_obj, key, getattr(validated, key))
        return await self._save(db, db_obj)

    async def replace(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: Dict[str, Any]
    ) -> ModelType:
        """
        키를 제외한 모든 속성을 교체합니다. 전달되지 않은 속성은 None(기본값)으로 초기화됩니다.
        """
        data = {k: v for k, v in obj_in.items() if k != self.key_attribute}
        data[self.key_attribute] = getattr(db_obj, self.key_attribute)
        validated = self.model.model_validate(data)
        for column_attr in sa_inspect(self.model).column_attrs:
            if column_attr.key != self.key_attribute:
                setattr(db_obj, column_attr.key, getattr(validated, column_attr.key))
        return await self._save(db, db_obj)

    async def delete(self, db: AsyncSession, *, id: Any) -> ModelType:
        """
        키를 기준으로 레코드를 삭제합니다.
        """
        db_obj = await self.get_or_404(db, id)
        await db.delete(db_obj)
        await db.commit()
        return db_obj

    async def _save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise
        await db.refresh(db_obj)
        return db_obj

