# petcare/domains/docs/__init__.py

"""
'docs' 도메인 패키지입니다. 미디어 스트림을 가진 문서(Document) 엔티티를 다룹니다.
"""

__title__ = "PetCare Documents Domain"
__all__ = ["models", "crud"]
