# petcare/core/__init__.py

"""
애플리케이션 전반에 걸쳐 사용되는 핵심 구성 요소 패키지입니다.

- `config.py`: 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 비동기 엔진, 세션 팩토리, 요청 단위 세션 의존성.
- `crud_base.py`: 공통 저장소(repository) 기본 클래스.
- `exceptions.py`: 도메인 예외, ApiError 오류 봉투, 전역 예외 처리기.
- `types.py`: timedelta/Enum 컬럼 타입 변환기.
"""

__title__ = "PetCare Core"
__all__ = []
