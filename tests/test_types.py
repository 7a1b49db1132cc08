# tests/test_types.py

"""
컬럼 타입 변환기(DurationType, OrdinalEnumType)에 대한 단위 테스트입니다.
"""

from datetime import timedelta

import pytest
from sqlalchemy.dialects import sqlite

from petcare.core.types import DurationType, OrdinalEnumType, duration_to_iso, iso_to_duration
from petcare.domains.centers.models import PetServiceType

DIALECT = sqlite.dialect()


@pytest.mark.parametrize(
    "value, iso",
    [
        (timedelta(hours=8, minutes=30), "PT8H30M"),
        (timedelta(days=1, hours=2), "P1DT2H"),
        (timedelta(0), "PT0S"),
    ],
)
def test_duration_iso_conversion(value: timedelta, iso: str):
    assert duration_to_iso(value) == iso
    assert iso_to_duration(iso) == value


def test_duration_type_binds_and_loads():
    column_type = DurationType()

    assert column_type.process_bind_param(timedelta(minutes=45), DIALECT) == "PT45M"
    # 문자열로 전달된 기간은 정규화된 ISO 문자열로 저장합니다.
    assert column_type.process_bind_param("PT1H", DIALECT) == "PT1H"
    assert column_type.process_result_value("PT1H", DIALECT) == timedelta(hours=1)
    assert column_type.process_bind_param(None, DIALECT) is None
    assert column_type.process_result_value(None, DIALECT) is None


def test_ordinal_enum_type_binds_by_declaration_order():
    column_type = OrdinalEnumType(PetServiceType)

    assert column_type.process_bind_param(PetServiceType.GROOMING, DIALECT) == 0
    assert column_type.process_bind_param(PetServiceType.VETERINARY, DIALECT) == 5
    # 멤버 이름과 값 모두 허용합니다.
    assert column_type.process_bind_param("BOARDING", DIALECT) == 1
    assert column_type.process_bind_param("DayCare", DIALECT) == 2
    assert column_type.process_bind_param(None, DIALECT) is None


def test_ordinal_enum_type_loads_members():
    column_type = OrdinalEnumType(PetServiceType)

    assert column_type.process_result_value(3, DIALECT) is PetServiceType.TRAINING
    assert column_type.process_result_value(None, DIALECT) is None
    with pytest.raises(ValueError):
        column_type.process_result_value(6, DIALECT)
    with pytest.raises(ValueError):
        column_type.process_result_value(-1, DIALECT)
    assert column_type.python_type is PetServiceType
