# petcare/domains/centers/crud.py

from typing import List

from sqlalchemy import text
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from petcare.core.crud_base import CRUDBase, quoted_table_name
from . import models


class CRUDManager(CRUDBase[models.Manager]):
    async def get_all(self, db: AsyncSession) -> List[models.Manager]:
        """
        생성된 쿼리 대신 원시 SQL `SELECT *`로 전체 관리자를 조회합니다.
        """
        sql = f"SELECT * FROM {quoted_table_name(self.model)}"
        statement = select(self.model).from_statement(text(sql))
        result = await db.execute(statement)
        return list(result.scalars().all())


pet_service = CRUDBase(models.PetService)
manager = CRUDManager(models.Manager)
pet_care_center = CRUDBase(models.PetCareCenter)
pet_care_center_services = CRUDBase(models.PetCareCenterServices)
pet_care_center_pets = CRUDBase(models.PetCareCenterPets)
pet_care_center_images = CRUDBase(models.PetCareCenterImages)
pet_care_center_business_hours = CRUDBase(models.PetCareCenterBusinessHours)
