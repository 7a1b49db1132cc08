# petcare/domains/models/__init__.py

"""
모든 도메인의 SQLModel 모델을 한 곳에서 임포트하여
SQLModel.metadata가 모든 테이블을 인식하도록 보장합니다.
(create_all, Alembic autogenerate, 테스트 픽스처에서 사용)
"""

# pets
from petcare.domains.pets.models import Pet, PetOwner, PetOwnerPets

# centers
from petcare.domains.centers.models import (
    PetServiceType, PetService, Manager, PetCareCenter,
    PetCareCenterServices, PetCareCenterPets, PetCareCenterImages, PetCareCenterBusinessHours,
)

# docs
from petcare.domains.docs.models import Document


__all__ = [
    # pets
    "Pet", "PetOwner", "PetOwnerPets",
    # centers
    "PetServiceType", "PetService", "Manager", "PetCareCenter",
    "PetCareCenterServices", "PetCareCenterPets", "PetCareCenterImages", "PetCareCenterBusinessHours",
    # docs
    "Document",
]
