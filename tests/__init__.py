# tests/__init__.py

"""
PetCare OData API의 테스트 스위트 패키지입니다.

- `conftest.py`: 인메모리 SQLite 엔진, 세션, 의존성이 교체된 AsyncClient 픽스처
- `fixtures/`: 엔티티셋별 생성용 JSON 페이로드
- `test_odata_*.py`: 서비스 문서, $metadata, 엔티티셋 엔드포인트 통합 테스트
- `test_repositories.py`, `test_types.py`, `test_exceptions.py`: 저장소/타입/예외 처리기 단위 테스트
"""

__title__ = "PetCare OData API Tests"
__version__ = "0.1.0"
__all__ = []
