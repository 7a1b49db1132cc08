# petcare/domains/pets/__init__.py

"""
'pets' 도메인 패키지입니다.

반려동물(Pet), 보호자(PetOwner), 그리고 둘을 연결하는 조인 테이블(PetOwnerPets)을 다룹니다.

주요 서브모듈:
- `models.py`: 테이블에 매핑되는 SQLModel 정의.
- `crud.py`: 테이블별 저장소 인스턴스. 보호자 전체 조회는 원시 SQL을 사용합니다.
"""

__title__ = "PetCare Pets Domain"
__description__ = "Pets, pet owners and the owner/pet join table."
__all__ = ["models", "crud"]
