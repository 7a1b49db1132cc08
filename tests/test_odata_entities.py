# tests/test_odata_entities.py

"""
OData 엔티티셋 엔드포인트에 대한 통합 테스트를 정의하는 모듈입니다.

- `POST /ss_test_bknd/{Set}` (생성) - 모든 엔티티셋
- `GET /ss_test_bknd/{Set}` (컬렉션 조회, $top, $skip, $count, $select, $orderby, nextLink)
- `GET /ss_test_bknd/{Set}/$count`
- `GET /ss_test_bknd/{Set}({key})` (단일 조회)
- `PATCH`, `PUT`, `DELETE /ss_test_bknd/{Set}({key})`
- `GET`, `PUT /ss_test_bknd/Documents({key})/$value` (미디어 스트림)
- 미지원 쿼리 옵션, 잘못된 본문/키에 대한 오류 응답
"""

from typing import Any, Dict

import pytest
from httpx import AsyncClient

from petcare.core.config import settings
from petcare.odata.registry import registry

ENTITY_KEYS = {
    "Pets": "PetId",
    "PetServices": "ServiceId",
    "Documents": "DocId",
    "Managers": "MId",
    "PetOwners": "OwnerId",
    "PetCareCenters": "PcId",
    "PetOwnerPets": "Id",
    "PetCareCenterImages": "Id",
    "PetCareCenterServices": "Id",
    "PetCareCenterPets": "Id",
    "PetCareCenterBusinessHours": "Id",
}


async def create_pets(client: AsyncClient, odata_root: str, names) -> None:
    for i, name in enumerate(names):
        payload = {"PetName": name, "AnimalType": "Dog", "Weight": 10.0 + i}
        response = await client.post(f"{odata_root}/Pets", json=payload)
        assert response.status_code == 201, response.text


# --- 생성 및 기본 조회 ---


@pytest.mark.asyncio
@pytest.mark.parametrize("entity_set", list(ENTITY_KEYS))
async def test_create_and_read_first_entity(
    client: AsyncClient, odata_root: str, entity_payloads: Dict[str, Dict[str, Any]], entity_set: str
):
    """
    엔티티셋마다 하나를 생성한 뒤 `$top=1`과 `$count`로 조회되는지 확인합니다.
    """
    print(f"\n--- Running test_create_and_read_first_entity[{entity_set}] ---")
    payload = entity_payloads[entity_set]
    response = await client.post(f"{odata_root}/{entity_set}", json=payload)
    print(f"Response JSON: {response.json()}")

    assert response.status_code == 201
    created = response.json()
    key_name = ENTITY_KEYS[entity_set]
    assert created[key_name] == 1
    assert created["@odata.context"] == f"http://test{odata_root}/$metadata#{entity_set}/$entity"
    assert response.headers["Location"] == f"http://test{odata_root}/{entity_set}(1)"
    for name, value in payload.items():
        assert created[name] == value

    response = await client.get(f"{odata_root}/{entity_set}", params={"$top": 1})
    assert response.status_code == 200
    body = response.json()
    assert body["@odata.context"] == f"http://test{odata_root}/$metadata#{entity_set}"
    assert len(body["value"]) == 1
    assert body["value"][0][key_name] == 1

    response = await client.get(f"{odata_root}/{entity_set}/$count")
    assert response.status_code == 200
    assert response.text == "1"


@pytest.mark.asyncio
async def test_create_with_existing_key_conflicts(client: AsyncClient, odata_root: str):
    response = await client.post(f"{odata_root}/Managers", json={"MId": 7, "ManagerName": "Lee"})
    assert response.status_code == 201

    response = await client.post(f"{odata_root}/Managers", json={"MId": 7, "ManagerName": "Lee again"})
    assert response.status_code == 409
    body = response.json()
    assert body["message"] == "Resource Exists"
    assert body["details"] == ["Manager with key 7 already exists"]


@pytest.mark.asyncio
async def test_create_with_unknown_property(client: AsyncClient, odata_root: str):
    response = await client.post(f"{odata_root}/Pets", json={"PetName": "Rex", "Wings": 2})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Error occurred"
    assert body["details"] == ["Property 'Wings' does not exist in type 'Pet'"]


@pytest.mark.asyncio
async def test_create_with_invalid_value(client: AsyncClient, odata_root: str):
    response = await client.post(f"{odata_root}/Pets", json={"PetName": "Rex", "Weight": "heavy"})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation Errors"
    assert any(detail.startswith("weight") for detail in body["details"])


@pytest.mark.asyncio
async def test_create_with_unknown_enum_member(client: AsyncClient, odata_root: str):
    response = await client.post(f"{odata_root}/PetServices", json={"ServiceType": "Astrology"})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation Errors"


@pytest.mark.asyncio
async def test_create_with_malformed_json(client: AsyncClient, odata_root: str):
    response = await client.post(
        f"{odata_root}/Pets", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Malformed JSON request"

    response = await client.post(f"{odata_root}/Pets", json=[{"PetName": "Rex"}])
    assert response.status_code == 400
    assert response.json()["details"] == ["Request body must be a JSON object"]


@pytest.mark.asyncio
async def test_create_with_unsupported_media_type(client: AsyncClient, odata_root: str):
    response = await client.post(
        f"{odata_root}/Pets", content=b"PetName=Rex", headers={"Content-Type": "text/plain"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid JSON"
    assert body["details"] == [
        "text/plain media type is not supported. Supported media types are application/json"
    ]


@pytest.mark.asyncio
async def test_post_to_single_entity_is_rejected(client: AsyncClient, odata_root: str):
    response = await client.post(f"{odata_root}/Pets(1)", json={"PetName": "Rex"})
    assert response.status_code == 400
    assert response.json()["details"] == ["The operation is only allowed on the entity set 'Pets'"]


# --- 컬렉션 쿼리 옵션 ---


@pytest.mark.asyncio
async def test_collection_default_order_and_count(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Coco", "Ace", "Bolt"])

    response = await client.get(f"{odata_root}/Pets", params={"$count": "true"})
    assert response.status_code == 200
    body = response.json()
    assert body["@odata.count"] == 3
    assert [p["PetId"] for p in body["value"]] == [1, 2, 3]
    assert "@odata.nextLink" not in body


@pytest.mark.asyncio
async def test_collection_top_skip_orderby(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Coco", "Ace", "Bolt", "Duke"])

    response = await client.get(
        f"{odata_root}/Pets", params={"$orderby": "PetName desc", "$skip": 1, "$top": 2, "$count": "true"}
    )
    assert response.status_code == 200
    body = response.json()
    assert [p["PetName"] for p in body["value"]] == ["Coco", "Bolt"]
    # $count는 페이징 전 전체 개수입니다.
    assert body["@odata.count"] == 4

    response = await client.get(f"{odata_root}/Pets", params={"$orderby": "PetName"})
    assert [p["PetName"] for p in response.json()["value"]] == ["Ace", "Bolt", "Coco", "Duke"]


@pytest.mark.asyncio
async def test_collection_select_keeps_key(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Ace"])

    response = await client.get(f"{odata_root}/Pets", params={"$select": "PetName,Weight"})
    assert response.status_code == 200
    body = response.json()
    assert body["@odata.context"] == f"http://test{odata_root}/$metadata#Pets(PetName,Weight)"
    assert body["value"] == [{"PetId": 1, "PetName": "Ace", "Weight": 10.0}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params, detail",
    [
        ({"$select": "Nickname"}, "Property 'Nickname' does not exist in type 'Pet'"),
        ({"$orderby": "Nickname"}, "Property 'Nickname' does not exist in type 'Pet'"),
        ({"$orderby": "PetName sideways"}, "Invalid $orderby direction 'sideways'"),
    ],
)
async def test_collection_invalid_options(client: AsyncClient, odata_root: str, params, detail):
    response = await client.get(f"{odata_root}/Pets", params=params)
    assert response.status_code == 400
    assert response.json()["details"] == [detail]


@pytest.mark.asyncio
async def test_collection_negative_top_is_mismatch(client: AsyncClient, odata_root: str):
    response = await client.get(f"{odata_root}/Pets", params={"$top": "-1"})
    assert response.status_code == 400
    assert response.json()["message"] == "Mismatch Type"

    response = await client.get(f"{odata_root}/Pets", params={"$skip": "many"})
    assert response.status_code == 400
    assert response.json()["message"] == "Mismatch Type"


@pytest.mark.asyncio
@pytest.mark.parametrize("option", ["$top", "$skip"])
async def test_collection_paging_beyond_int32_is_mismatch(client: AsyncClient, odata_root: str, option: str):
    response = await client.get(f"{odata_root}/Pets", params={option: "99999999999"})
    assert response.status_code == 400
    assert response.json()["message"] == "Mismatch Type"

    response = await client.get(f"{odata_root}/Pets", params={option: "2147483647"})
    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("option", ["$filter", "$expand", "$search", "$apply"])
async def test_unsupported_query_options(client: AsyncClient, odata_root: str, option: str):
    response = await client.get(f"{odata_root}/Pets", params={option: "PetName eq 'Ace'"})
    assert response.status_code == 501
    body = response.json()
    assert body["message"] == "Not Implemented"
    assert body["details"] == [f"System query option '{option}' is not supported"]


@pytest.mark.asyncio
async def test_next_link_when_page_is_capped(
    client: AsyncClient, odata_root: str, monkeypatch: pytest.MonkeyPatch
):
    """ODATA_MAX_PAGE_SIZE로 잘린 응답에는 다음 $skip을 가리키는 nextLink가 붙습니다."""
    monkeypatch.setattr(settings, "ODATA_MAX_PAGE_SIZE", 2)
    await create_pets(client, odata_root, ["A", "B", "C", "D", "E"])

    response = await client.get(f"{odata_root}/Pets")
    body = response.json()
    assert [p["PetId"] for p in body["value"]] == [1, 2]
    assert body["@odata.nextLink"] == f"http://test{odata_root}/Pets?%24skip=2"

    response = await client.get(f"{odata_root}/Pets", params={"$skip": 2, "$top": 3})
    body = response.json()
    assert [p["PetId"] for p in body["value"]] == [3, 4]
    assert body["@odata.nextLink"] == f"http://test{odata_root}/Pets?%24skip=4&%24top=1"

    response = await client.get(f"{odata_root}/Pets", params={"$skip": 4})
    body = response.json()
    assert [p["PetId"] for p in body["value"]] == [5]
    assert "@odata.nextLink" not in body


@pytest.mark.asyncio
@pytest.mark.parametrize("entity_set", ["Managers", "PetOwners"])
async def test_plain_collection_pages_in_key_order(
    client: AsyncClient,
    odata_root: str,
    entity_payloads: Dict[str, Dict[str, Any]],
    monkeypatch: pytest.MonkeyPatch,
    entity_set: str,
):
    """
    옵션 없는 컬렉션 조회는 원시 SQL `get_all`을 사용합니다.
    결과가 키 순서가 아니어도 페이지와 nextLink는 키 순서를 따릅니다.
    """
    print(f"\n--- Running test_plain_collection_pages_in_key_order[{entity_set}] ---")
    for _ in range(3):
        response = await client.post(f"{odata_root}/{entity_set}", json=entity_payloads[entity_set])
        assert response.status_code == 201

    crud = registry.get(entity_set).crud
    raw_get_all = crud.get_all
    calls = []

    async def get_all_in_storage_order(db):
        calls.append(db)
        return list(reversed(await raw_get_all(db)))

    monkeypatch.setattr(crud, "get_all", get_all_in_storage_order)
    monkeypatch.setattr(settings, "ODATA_MAX_PAGE_SIZE", 2)
    key = ENTITY_KEYS[entity_set]

    response = await client.get(f"{odata_root}/{entity_set}")
    assert response.status_code == 200
    body = response.json()
    assert len(calls) == 1
    assert [e[key] for e in body["value"]] == [1, 2]
    assert body["@odata.nextLink"] == f"http://test{odata_root}/{entity_set}?%24skip=2"

    response = await client.get(body["@odata.nextLink"])
    body = response.json()
    assert [e[key] for e in body["value"]] == [3]
    assert "@odata.nextLink" not in body



@pytest.mark.asyncio
async def test_unknown_entity_set(client: AsyncClient, odata_root: str):
    response = await client.get(f"{odata_root}/Unicorns")
    assert response.status_code == 404
    body = response.json()
    assert body["message"] == "Resource Not Found"
    assert body["details"] == ["Entity set 'Unicorns' not found"]


# --- 단일 엔티티 ---


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["Pets(1)", "Pets(PetId=1)"])
async def test_read_single_entity(client: AsyncClient, odata_root: str, path: str):
    await create_pets(client, odata_root, ["Ace"])

    response = await client.get(f"{odata_root}/{path}")
    assert response.status_code == 200
    body = response.json()
    assert body["@odata.context"] == f"http://test{odata_root}/$metadata#Pets/$entity"
    assert body["PetId"] == 1
    assert body["PetName"] == "Ace"
    assert body["Breed"] is None


@pytest.mark.asyncio
async def test_read_single_entity_with_select(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Ace"])

    response = await client.get(f"{odata_root}/Pets(1)", params={"$select": "PetName"})
    assert response.json() == {
        "@odata.context": f"http://test{odata_root}/$metadata#Pets(PetName)/$entity",
        "PetId": 1,
        "PetName": "Ace",
    }


@pytest.mark.asyncio
async def test_read_missing_entity(client: AsyncClient, odata_root: str):
    response = await client.get(f"{odata_root}/Pets(42)")
    assert response.status_code == 404
    assert response.json()["details"] == ["Pet with key 42 not found"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path",
    [
        "Pets(abc)",
        "Pets(OwnerId=1)",
        "Pets(1",
        "Pets(99999999999999999999999)",
        "Pets(PetId=2147483648)",
        "Pets(-2147483649)",
    ],
)
async def test_read_invalid_key(client: AsyncClient, odata_root: str, path: str):
    response = await client.get(f"{odata_root}/{path}")
    assert response.status_code == 400
    assert response.json()["message"] == "Error occurred"


@pytest.mark.asyncio
async def test_key_out_of_int32_range(client: AsyncClient, odata_root: str):
    """Edm.Int32 범위를 벗어난 키는 DB에 도달하기 전에 400으로 거부됩니다."""
    response = await client.get(f"{odata_root}/Pets(99999999999999999999999)")
    assert response.status_code == 400
    assert response.json()["details"] == [
        "Key literal '99999999999999999999999' is out of range for Edm.Int32"
    ]

    response = await client.delete(f"{odata_root}/Pets(2147483648)")
    assert response.status_code == 400

    # 범위의 끝 값은 유효한 키입니다.
    response = await client.get(f"{odata_root}/Pets(2147483647)")
    assert response.status_code == 404



@pytest.mark.asyncio
async def test_patch_entity(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Ace"])

    response = await client.patch(f"{odata_root}/Pets(1)", json={"Breed": "Beagle", "Weight": 12.5})
    assert response.status_code == 200
    body = response.json()
    assert body["PetName"] == "Ace"
    assert body["Breed"] == "Beagle"
    assert body["Weight"] == 12.5

    response = await client.get(f"{odata_root}/Pets(1)")
    assert response.json()["Breed"] == "Beagle"


@pytest.mark.asyncio
async def test_put_replaces_entity(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Ace"])

    response = await client.put(f"{odata_root}/Pets(1)", json={"PetName": "Ace II", "Color": "Black"})
    assert response.status_code == 200
    body = response.json()
    assert body["PetId"] == 1
    assert body["PetName"] == "Ace II"
    assert body["Color"] == "Black"
    # 전달되지 않은 속성은 null로 초기화됩니다.
    assert body["AnimalType"] is None
    assert body["Weight"] is None


@pytest.mark.asyncio
async def test_update_requires_key(client: AsyncClient, odata_root: str):
    response = await client.patch(f"{odata_root}/Pets", json={"PetName": "Ace"})
    assert response.status_code == 400
    assert response.json()["details"] == ["A key is required to address a single Pet"]


@pytest.mark.asyncio
async def test_patch_missing_entity(client: AsyncClient, odata_root: str):
    response = await client.patch(f"{odata_root}/Pets(9)", json={"PetName": "Ghost"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_entity(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Ace", "Bolt"])

    response = await client.delete(f"{odata_root}/Pets(1)")
    assert response.status_code == 204

    response = await client.get(f"{odata_root}/Pets(1)")
    assert response.status_code == 404
    response = await client.get(f"{odata_root}/Pets/$count")
    assert response.text == "1"

    response = await client.delete(f"{odata_root}/Pets(1)")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_enum_and_duration_values(client: AsyncClient, odata_root: str, entity_payloads):
    response = await client.post(f"{odata_root}/PetServices", json=entity_payloads["PetServices"])
    assert response.status_code == 201

    response = await client.patch(f"{odata_root}/PetServices(1)", json={"ServiceType": "Veterinary"})
    assert response.json()["ServiceType"] == "Veterinary"

    response = await client.post(
        f"{odata_root}/PetCareCenterBusinessHours",
        json={"PcId": 1, "DayOfWeek": "Friday", "OpensAt": "10:30:00", "OpenFor": "P1DT2H"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["OpensAt"] == "10:30:00"
    assert body["OpenFor"] == "P1DT2H"


# --- 미디어 스트림 ---


@pytest.mark.asyncio
async def test_document_media_stream(client: AsyncClient, odata_root: str, entity_payloads):
    response = await client.post(f"{odata_root}/Documents", json=entity_payloads["Documents"])
    assert response.status_code == 201
    body = response.json()
    assert "Content" not in body
    assert body["@odata.mediaContentType"] == "application/octet-stream"

    # 내용이 없으면 204
    response = await client.get(f"{odata_root}/Documents(1)/$value")
    assert response.status_code == 204

    pdf = b"%PDF-1.4 fake pdf bytes"
    response = await client.put(
        f"{odata_root}/Documents(1)/$value", content=pdf, headers={"Content-Type": "application/pdf"}
    )
    assert response.status_code == 204

    response = await client.get(f"{odata_root}/Documents(1)/$value")
    assert response.status_code == 200
    assert response.content == pdf
    assert response.headers["content-type"] == "application/pdf"

    response = await client.get(f"{odata_root}/Documents(1)")
    assert response.json()["DocFileType"] == "application/pdf"
    assert response.json()["@odata.mediaContentType"] == "application/pdf"

    # PUT으로 속성을 교체해도 미디어 내용과 Content-Type은 유지됩니다.
    response = await client.put(f"{odata_root}/Documents(1)", json={"DocName": "Renamed"})
    assert response.status_code == 200
    assert response.json()["DocName"] == "Renamed"
    assert response.json()["DocFileType"] == "application/pdf"
    response = await client.get(f"{odata_root}/Documents(1)/$value")
    assert response.content == pdf
    assert response.headers["content-type"] == "application/pdf"

    # 본문에 Content-Type을 지정하면 그 값으로 교체됩니다.
    response = await client.put(
        f"{odata_root}/Documents(1)", json={"DocName": "Renamed", "DocFileType": "application/x-pdf"}
    )
    assert response.json()["DocFileType"] == "application/x-pdf"


@pytest.mark.asyncio
async def test_empty_media_stream_is_no_content(client: AsyncClient, odata_root: str, entity_payloads):
    response = await client.post(f"{odata_root}/Documents", json=entity_payloads["Documents"])
    assert response.status_code == 201

    response = await client.put(
        f"{odata_root}/Documents(1)/$value", content=b"", headers={"Content-Type": "text/plain"}
    )
    assert response.status_code == 204

    # 0바이트 내용도 내용 없음으로 취급합니다.
    response = await client.get(f"{odata_root}/Documents(1)/$value")
    assert response.status_code == 204
    assert response.content == b""


@pytest.mark.asyncio
async def test_value_on_non_media_entity(client: AsyncClient, odata_root: str):
    await create_pets(client, odata_root, ["Ace"])
    response = await client.get(f"{odata_root}/Pets(1)/$value")
    assert response.status_code == 400
    assert response.json()["details"] == ["'Pet' is not a media entity type"]
