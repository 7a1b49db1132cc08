# petcare/domains/pets/models.py

from typing import Optional
from sqlmodel import Field, SQLModel

from petcare.core.config import settings


class Pet(SQLModel, table=True):
    """
    Pet 테이블 모델을 정의하는 클래스입니다.
    """
    __tablename__ = "Pet"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    pet_id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "PetId"})
    pet_name: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "PetName"}, description="이름")
    breed: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "Breed"}, description="품종")
    animal_type: Optional[str] = Field(default=None, max_length=50, sa_column_kwargs={"name": "AnimalType"}, description="동물 종류 (예: Dog, Cat)")
    gender: Optional[str] = Field(default=None, max_length=20, sa_column_kwargs={"name": "Gender"})
    color: Optional[str] = Field(default=None, max_length=50, sa_column_kwargs={"name": "Color"})
    weight: Optional[float] = Field(default=None, sa_column_kwargs={"name": "Weight"}, description="체중")
    height: Optional[float] = Field(default=None, sa_column_kwargs={"name": "Height"}, description="체고")


class PetOwner(SQLModel, table=True):
    """
    PetOwner(보호자) 테이블 모델을 정의하는 클래스입니다.
    """
    __tablename__ = "PetOwner"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    owner_id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "OwnerId"})
    owner_name: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "OwnerName"}, description="보호자 이름")
    address: Optional[str] = Field(default=None, max_length=255, sa_column_kwargs={"name": "Address"})
    city: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "City"})
    phone: Optional[str] = Field(default=None, max_length=20, sa_column_kwargs={"name": "Phone"})
    email: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "Email"})


class PetOwnerPets(SQLModel, table=True):
    """
    보호자와 반려동물을 연결하는 조인 테이블입니다.
    외래 키 제약 없이 키 값만 보관합니다.
    """
    __tablename__ = "PetOwnerPets"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "Id"})
    owner_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "OwnerId"})
    pet_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "PetId"})
