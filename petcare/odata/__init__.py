# petcare/odata/__init__.py

"""
OData v4 서비스 패키지입니다.

- registry: 엔티티셋 이름 -> 모델/저장소 매핑
- metadata: $metadata(CSDL) 및 서비스 문서 생성
- query: 시스템 쿼리 옵션($top, $skip, $count, $select, $orderby) 처리
- serializer: 엔티티 <-> OData JSON 변환
- routers: FastAPI 엔드포인트
"""

__title__ = "OData Service"
__all__ = ["registry", "metadata", "query", "serializer", "routers"]
