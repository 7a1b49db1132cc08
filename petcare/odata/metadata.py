# petcare/odata/metadata.py

"""
OData $metadata(CSDL) 및 서비스 문서 생성 모듈입니다.

테이블 모델의 컬럼 정보에서 EDM 스키마를 생성합니다.
- EnumType: OrdinalEnumType 컬럼에 사용된 열거형 (멤버 값 = ordinal)
- EntityType: 키, 속성(Edm.* 타입, Nullable, MaxLength), 미디어 엔티티의 HasStream
- EntityContainer: 레지스트리의 모든 엔티티셋
"""

from __future__ import annotations

import enum
from typing import Any, Dict, List, Type
import xml.etree.ElementTree as ET

from sqlalchemy import (
    BigInteger, Boolean, Column, Date, DateTime, Float, Integer, LargeBinary,
    Numeric, SmallInteger, Time,
)

from petcare.core.types import DurationType, OrdinalEnumType
from petcare.odata.registry import ODataRegistry

EDMX_NS = "http://docs.oasis-open.org/odata/ns/edmx"
EDM_NS = "http://docs.oasis-open.org/odata/ns/edm"
APP_NS = "http://www.w3.org/2007/app"
ATOM_NS = "http://www.w3.org/2005/Atom"
METADATA_NS = "http://docs.oasis-open.org/odata/ns/metadata"
XML_NS = "http://www.w3.org/XML/1998/namespace"

ET.register_namespace("edmx", EDMX_NS)
# CSDL의 EDM 요소는 접두사 없이 기본 네임스페이스(xmlns=...)로 직렬화합니다.
ET.register_namespace("", EDM_NS)
ET.register_namespace("app", APP_NS)
ET.register_namespace("atom", ATOM_NS)
ET.register_namespace("metadata", METADATA_NS)


def _q(ns: str, tag: str) -> str:
    return f"{{{ns}}}{tag}"


def edm_type(column: Column, namespace: str) -> str:
    """SQLAlchemy 컬럼 타입을 EDM 기본 타입 이름으로 변환합니다."""
    col_type = column.type
    if isinstance(col_type, OrdinalEnumType):
        return f"{namespace}.{col_type.enum_class.__name__}"
    if isinstance(col_type, DurationType):
        return "Edm.Duration"
    if isinstance(col_type, Boolean):
        return "Edm.Boolean"
    if isinstance(col_type, BigInteger):
        return "Edm.Int64"
    if isinstance(col_type, SmallInteger):
        return "Edm.Int16"
    if isinstance(col_type, Integer):
        return "Edm.Int32"
    if isinstance(col_type, Float):
        return "Edm.Double"
    if isinstance(col_type, Numeric):
        return "Edm.Decimal"
    if isinstance(col_type, DateTime):
        return "Edm.DateTimeOffset"
    if isinstance(col_type, Date):
        return "Edm.Date"
    if isinstance(col_type, Time):
        return "Edm.TimeOfDay"
    if isinstance(col_type, LargeBinary):
        return "Edm.Binary"
    return "Edm.String"


def _enum_types(registry: ODataRegistry) -> List[Type[enum.Enum]]:
    found: List[Type[enum.Enum]] = []
    for entity_set in registry:
        for prop in entity_set.properties:
            if isinstance(prop.column.type, OrdinalEnumType) and prop.column.type.enum_class not in found:
                found.append(prop.column.type.enum_class)
    return found


def build_metadata_document(registry: ODataRegistry, namespace: str) -> bytes:
    """CSDL 4.0 $metadata XML 문서를 생성합니다."""
    edmx = ET.Element(_q(EDMX_NS, "Edmx"), {"Version": "4.0"})
    data_services = ET.SubElement(edmx, _q(EDMX_NS, "DataServices"))
    schema = ET.SubElement(data_services, _q(EDM_NS, "Schema"), {"Namespace": namespace})

    for enum_class in _enum_types(registry):
        enum_type = ET.SubElement(
            schema, _q(EDM_NS, "EnumType"),
            {"Name": enum_class.__name__, "UnderlyingType": "Edm.Int32"},
        )
        for ordinal, member in enumerate(enum_class):
            ET.SubElement(enum_type, _q(EDM_NS, "Member"), {"Name": str(member.value), "Value": str(ordinal)})

    for entity_set in registry:
        attrs: Dict[str, Any] = {"Name": entity_set.entity_type}
        if entity_set.has_stream:
            attrs["HasStream"] = "true"
        entity_type = ET.SubElement(schema, _q(EDM_NS, "EntityType"), attrs)

        key = ET.SubElement(entity_type, _q(EDM_NS, "Key"))
        ET.SubElement(key, _q(EDM_NS, "PropertyRef"), {"Name": entity_set.key.name})

        for prop in entity_set.properties:
            type_name = edm_type(prop.column, namespace)
            prop_attrs = {"Name": prop.name, "Type": type_name}
            if prop.is_key or not prop.column.nullable:
                prop_attrs["Nullable"] = "false"
            # sqlmodel의 AutoString은 String을 감싼 TypeDecorator이므로 length 속성으로 판단합니다.
            length = getattr(prop.column.type, "length", None)
            if type_name == "Edm.String" and length:
                prop_attrs["MaxLength"] = str(length)
            ET.SubElement(entity_type, _q(EDM_NS, "Property"), prop_attrs)

    container = ET.SubElement(schema, _q(EDM_NS, "EntityContainer"), {"Name": f"{namespace}Container"})
    for entity_set in registry:
        ET.SubElement(
            container, _q(EDM_NS, "EntitySet"),
            {"Name": entity_set.name, "EntityType": f"{namespace}.{entity_set.entity_type}"},
        )

    return ET.tostring(edmx, encoding="utf-8", xml_declaration=True)


def build_service_document_json(registry: ODataRegistry, service_root: str) -> Dict[str, Any]:
    """JSON 형식 서비스 문서를 생성합니다."""
    return {
        "@odata.context": f"{service_root}/$metadata",
        "value": [
            {"name": entity_set.name, "kind": "EntitySet", "url": entity_set.name}
            for entity_set in registry
        ],
    }


def build_service_document_xml(registry: ODataRegistry, service_root: str, title: str) -> bytes:
    """AtomPub 형식(app:service) 서비스 문서를 생성합니다."""
    service = ET.Element(
        _q(APP_NS, "service"),
        {
            _q(XML_NS, "base"): f"{service_root}/",
            _q(METADATA_NS, "context"): f"{service_root}/$metadata",
        },
    )
    workspace = ET.SubElement(service, _q(APP_NS, "workspace"))
    ET.SubElement(workspace, _q(ATOM_NS, "title")).text = title
    for entity_set in registry:
        collection = ET.SubElement(workspace, _q(APP_NS, "collection"), {"href": entity_set.name})
        ET.SubElement(collection, _q(ATOM_NS, "title")).text = entity_set.name
    return ET.tostring(service, encoding="utf-8", xml_declaration=True)
