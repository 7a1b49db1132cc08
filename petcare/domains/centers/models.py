# petcare/domains/centers/models.py

import enum
from datetime import time, timedelta
from typing import Optional

from sqlmodel import Field, SQLModel

from petcare.core.config import settings
from petcare.core.types import DurationType, OrdinalEnumType


class PetServiceType(str, enum.Enum):
    """
    펫 서비스 종류. DB에는 선언 순서(ordinal)로 저장되므로 순서를 바꾸지 마세요.
    """
    GROOMING = "Grooming"
    BOARDING = "Boarding"
    DAY_CARE = "DayCare"
    TRAINING = "Training"
    WALKING = "Walking"
    VETERINARY = "Veterinary"


class PetService(SQLModel, table=True):
    """
    PetService 테이블 모델을 정의하는 클래스입니다.
    """
    __tablename__ = "PetService"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    service_id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "ServiceId"})
    service_type: Optional[PetServiceType] = Field(
        default=None, sa_type=OrdinalEnumType(PetServiceType), sa_column_kwargs={"name": "ServiceType"},
        description="서비스 종류"
    )
    price: Optional[float] = Field(default=None, sa_column_kwargs={"name": "Price"}, description="가격")
    dog_size: Optional[str] = Field(default=None, max_length=20, sa_column_kwargs={"name": "DogSize"})
    service_at: Optional[str] = Field(default=None, max_length=50, sa_column_kwargs={"name": "ServiceAt"}, description="서비스 장소")
    duration_in_days: Optional[int] = Field(default=None, sa_column_kwargs={"name": "DurationInDays"})
    duration_in_hours: Optional[int] = Field(default=None, sa_column_kwargs={"name": "DurationInHours"})
    online_booking_allowed: Optional[bool] = Field(default=None, sa_column_kwargs={"name": "OnlineBookingAllowed"})
    adv_payment_reqd: Optional[bool] = Field(default=None, sa_column_kwargs={"name": "AdvPaymentReqd"}, description="선결제 필요 여부")


class Manager(SQLModel, table=True):
    """
    Manager(센터 관리자) 테이블 모델을 정의하는 클래스입니다.
    """
    __tablename__ = "Manager"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    m_id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "MId"})
    manager_name: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "ManagerName"})
    email: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "Email"})
    phone: Optional[str] = Field(default=None, max_length=20, sa_column_kwargs={"name": "Phone"})


class PetCareCenter(SQLModel, table=True):
    """
    PetCareCenter 테이블 모델을 정의하는 클래스입니다.
    """
    __tablename__ = "PetCareCenter"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    pc_id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "PcId"})
    pc_name: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "PcName"}, description="센터 이름")
    address: Optional[str] = Field(default=None, max_length=255, sa_column_kwargs={"name": "Address"})
    city: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "City"})
    phone: Optional[str] = Field(default=None, max_length=20, sa_column_kwargs={"name": "Phone"})
    email: Optional[str] = Field(default=None, max_length=100, sa_column_kwargs={"name": "Email"})
    rating: Optional[float] = Field(default=None, sa_column_kwargs={"name": "Rating"})
    m_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "MId"}, description="관리자 ID")


# --- 조인 테이블 ---
# 외래 키 제약 없이 양쪽 키 값만 보관하며, 각각 독립된 엔티티셋으로 노출됩니다.

class PetCareCenterServices(SQLModel, table=True):
    __tablename__ = "PetCareCenterServices"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "Id"})
    pc_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "PcId"})
    service_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "ServiceId"})


class PetCareCenterPets(SQLModel, table=True):
    __tablename__ = "PetCareCenterPets"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "Id"})
    pc_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "PcId"})
    pet_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "PetId"})


class PetCareCenterImages(SQLModel, table=True):
    __tablename__ = "PetCareCenterImages"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "Id"})
    pc_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "PcId"})
    doc_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "DocId"}, description="이미지 문서 ID")


class PetCareCenterBusinessHours(SQLModel, table=True):
    """
    센터의 요일별 영업 시간입니다. OpenFor는 ISO-8601 기간 문자열로 저장됩니다.
    """
    __tablename__ = "PetCareCenterBusinessHours"
    __table_args__ = {"schema": settings.DB_SCHEMA}

    id: Optional[int] = Field(default=None, primary_key=True, sa_column_kwargs={"name": "Id"})
    pc_id: Optional[int] = Field(default=None, sa_column_kwargs={"name": "PcId"})
    day_of_week: Optional[str] = Field(default=None, max_length=10, sa_column_kwargs={"name": "DayOfWeek"})
    opens_at: Optional[time] = Field(default=None, sa_column_kwargs={"name": "OpensAt"})
    open_for: Optional[timedelta] = Field(default=None, sa_type=DurationType, sa_column_kwargs={"name": "OpenFor"})
