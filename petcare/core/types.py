# petcare/core/types.py

"""
테이블 컬럼에 사용하는 SQLAlchemy 타입 변환기 모듈입니다.

- `DurationType`: timedelta <-> ISO-8601 기간 문자열 (예: "PT8H30M").
- `OrdinalEnumType`: Enum 멤버 <-> 선언 순서 기반 정수(ordinal).
"""

from datetime import timedelta
from enum import Enum
from typing import Optional, Type

from pydantic import TypeAdapter
from sqlalchemy import Integer, String
from sqlalchemy.types import TypeDecorator

# pydantic은 timedelta를 ISO-8601 기간 문자열로 직렬화/파싱합니다.
_duration_adapter = TypeAdapter(timedelta)


def duration_to_iso(value: timedelta) -> str:
    """timedelta를 ISO-8601 기간 문자열로 변환합니다."""
    return _duration_adapter.dump_python(value, mode="json")


def iso_to_duration(value: str) -> timedelta:
    """ISO-8601 기간 문자열을 timedelta로 변환합니다."""
    return _duration_adapter.validate_python(value)


class DurationType(TypeDecorator):
    """timedelta 값을 ISO-8601 문자열 컬럼으로 저장합니다."""

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value: Optional[timedelta], dialect) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, str):
            value = iso_to_duration(value)
        return duration_to_iso(value)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[timedelta]:
        if value is None:
            return None
        return iso_to_duration(value)

    @property
    def python_type(self):
        return timedelta


class OrdinalEnumType(TypeDecorator):
    """
    Enum 멤버를 선언 순서의 0부터 시작하는 정수로 저장합니다.
    DB에 정의되지 않은 정수가 있으면 ValueError를 발생시킵니다.
    """

    impl = Integer
    cache_ok = True

    def __init__(self, enum_class: Type[Enum], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.enum_class = enum_class
        self._members = list(enum_class)

    def process_bind_param(self, value, dialect) -> Optional[int]:
        if value is None:
            return None
        if not isinstance(value, self.enum_class):
            # 멤버 이름 또는 값으로 전달된 경우도 허용합니다.
            value = self.enum_class[value] if value in self.enum_class.__members__ else self.enum_class(value)
        return self._members.index(value)

    def process_result_value(self, value: Optional[int], dialect):
        if value is None:
            return None
        if not 0 <= value < len(self._members):
            raise ValueError(f"{value} is not a valid ordinal for {self.enum_class.__name__}")
        return self._members[value]

    @property
    def python_type(self):
        return self.enum_class
