# petcare/__init__.py

"""
PetCare OData 서비스의 메인 패키지입니다.

이 패키지는 반려동물, 보호자, 펫케어 센터, 서비스, 관리자, 문서로 구성된
관계형 스키마를 OData v4 API로 노출합니다.

- `main.py`: FastAPI 애플리케이션 진입점.
- `core`: 설정, 데이터베이스 연결, 공통 CRUD, 예외 처리, 컬럼 타입 변환기.
- `domains`: 각 비즈니스 도메인(pets, centers, docs)의 테이블 모델과 저장소(repository).
- `odata`: 엔티티셋 레지스트리, $metadata 생성, 시스템 쿼리 옵션 처리, OData 라우터.
"""

__version__ = "0.1.0"
__title__ = "PetCare OData API"
__description__ = "OData v4 backend for pets, pet owners and pet care centers."
__all__ = []
