# petcare/domains/pets/crud.py

from typing import List

from sqlalchemy import text
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from petcare.core.crud_base import CRUDBase, quoted_table_name
from . import models


class CRUDPetOwner(CRUDBase[models.PetOwner]):
    async def get_all(self, db: AsyncSession) -> List[models.PetOwner]:
        """
        생성된 쿼리 대신 원시 SQL `SELECT *`로 전체 보호자를 조회합니다.
        결과 컬럼은 이름으로 모델 속성에 매핑됩니다.
        """
        sql = f"SELECT * FROM {quoted_table_name(self.model)}"
        statement = select(self.model).from_statement(text(sql))
        result = await db.execute(statement)
        return list(result.scalars().all())


pet = CRUDBase(models.Pet)
pet_owner = CRUDPetOwner(models.PetOwner)
pet_owner_pets = CRUDBase(models.PetOwnerPets)
