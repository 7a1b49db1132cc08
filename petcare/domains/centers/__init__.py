# petcare/domains/centers/__init__.py

"""
'centers' 도메인 패키지입니다.

펫케어 센터(PetCareCenter), 센터 관리자(Manager), 펫 서비스(PetService)와
센터 관련 조인 테이블(서비스, 반려동물, 이미지, 영업 시간)을 다룹니다.

주요 서브모듈:
- `models.py`: 테이블에 매핑되는 SQLModel 정의와 PetServiceType 열거형.
- `crud.py`: 테이블별 저장소 인스턴스. 관리자 전체 조회는 원시 SQL을 사용합니다.
"""

__title__ = "PetCare Centers Domain"
__description__ = "Pet care centers, managers, pet services and center join tables."
__all__ = ["models", "crud"]
