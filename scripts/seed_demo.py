# scripts/seed_demo.py

"""
데모 데이터를 모든 엔티티셋에 적재하는 CLI 스크립트입니다.

    python -m scripts.seed_demo --create-tables
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import typer

from petcare.core.database import create_db_and_tables, engine, get_async_session_context
from petcare.odata import serializer
from petcare.odata.registry import registry

logger = logging.getLogger("seed_demo")

cli = typer.Typer()

DEFAULT_DATA_FILE = Path(__file__).with_name("demo_data.json")


async def seed(data: Dict[str, List[Dict[str, Any]]], create_tables: bool) -> Dict[str, int]:
    """
    엔티티셋 이름 -> EDM 속성 이름의 JSON 객체 목록을 받아 저장합니다.
    이미 데이터가 있는 엔티티셋은 건너뜁니다. 엔티티셋별 생성 건수를 반환합니다.
    """
    if create_tables:
        await create_db_and_tables()

    created: Dict[str, int] = {}
    async with get_async_session_context() as db:
        for set_name, rows in data.items():
            entity_set = registry.get(set_name)
            if await entity_set.crud.count(db) > 0:
                logger.info("%s already has rows, skipping.", set_name)
                continue
            for row in rows:
                await entity_set.crud.create(db, obj_in=serializer.deserialize_entity(entity_set, row))
            created[set_name] = len(rows)
    await engine.dispose()
    return created


@cli.command()
def main(
    data_file: Path = typer.Option(
        DEFAULT_DATA_FILE, '--data', '-d',
        exists=True, dir_okay=False,
        help="엔티티셋별 데모 데이터 JSON 파일입니다."
    ),
    create_tables: bool = typer.Option(
        False, '--create-tables',
        help="적재 전에 스키마와 테이블을 생성합니다."
    ),
):
    """
    PetCare OData API를 위한 데모 데이터를 적재합니다.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    with open(data_file, encoding="utf-8") as f:
        data = json.load(f)

    created = asyncio.run(seed(data, create_tables))
    for set_name, count in created.items():
        typer.echo(f"{set_name}: {count}건 생성")
    typer.echo("데모 데이터 적재가 완료되었습니다.")


if __name__ == "__main__":
    cli()
