"""initial petcare tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel

from petcare.core.config import settings
from petcare.core.types import DurationType, OrdinalEnumType
from petcare.domains.centers.models import PetServiceType

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SCHEMA = settings.DB_SCHEMA


def _string(length: int):
    return sqlmodel.sql.sqltypes.AutoString(length=length)


def _key(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), primary_key=True, nullable=False)


def upgrade() -> None:
    op.create_table(
        "Pet",
        _key("PetId"),
        sa.Column("PetName", _string(100), nullable=True),
        sa.Column("Breed", _string(100), nullable=True),
        sa.Column("AnimalType", _string(50), nullable=True),
        sa.Column("Gender", _string(20), nullable=True),
        sa.Column("Color", _string(50), nullable=True),
        sa.Column("Weight", sa.Float(), nullable=True),
        sa.Column("Height", sa.Float(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetOwner",
        _key("OwnerId"),
        sa.Column("OwnerName", _string(100), nullable=True),
        sa.Column("Address", _string(255), nullable=True),
        sa.Column("City", _string(100), nullable=True),
        sa.Column("Phone", _string(20), nullable=True),
        sa.Column("Email", _string(100), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetOwnerPets",
        _key("Id"),
        sa.Column("OwnerId", sa.Integer(), nullable=True),
        sa.Column("PetId", sa.Integer(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetService",
        _key("ServiceId"),
        sa.Column("ServiceType", OrdinalEnumType(PetServiceType), nullable=True),
        sa.Column("Price", sa.Float(), nullable=True),
        sa.Column("DogSize", _string(20), nullable=True),
        sa.Column("ServiceAt", _string(50), nullable=True),
        sa.Column("DurationInDays", sa.Integer(), nullable=True),
        sa.Column("DurationInHours", sa.Integer(), nullable=True),
        sa.Column("OnlineBookingAllowed", sa.Boolean(), nullable=True),
        sa.Column("AdvPaymentReqd", sa.Boolean(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "Manager",
        _key("MId"),
        sa.Column("ManagerName", _string(100), nullable=True),
        sa.Column("Email", _string(100), nullable=True),
        sa.Column("Phone", _string(20), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetCareCenter",
        _key("PcId"),
        sa.Column("PcName", _string(100), nullable=True),
        sa.Column("Address", _string(255), nullable=True),
        sa.Column("City", _string(100), nullable=True),
        sa.Column("Phone", _string(20), nullable=True),
        sa.Column("Email", _string(100), nullable=True),
        sa.Column("Rating", sa.Float(), nullable=True),
        sa.Column("MId", sa.Integer(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetCareCenterServices",
        _key("Id"),
        sa.Column("PcId", sa.Integer(), nullable=True),
        sa.Column("ServiceId", sa.Integer(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetCareCenterPets",
        _key("Id"),
        sa.Column("PcId", sa.Integer(), nullable=True),
        sa.Column("PetId", sa.Integer(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetCareCenterImages",
        _key("Id"),
        sa.Column("PcId", sa.Integer(), nullable=True),
        sa.Column("DocId", sa.Integer(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "PetCareCenterBusinessHours",
        _key("Id"),
        sa.Column("PcId", sa.Integer(), nullable=True),
        sa.Column("DayOfWeek", _string(10), nullable=True),
        sa.Column("OpensAt", sa.Time(), nullable=True),
        sa.Column("OpenFor", DurationType(), nullable=True),
        schema=SCHEMA,
    )
    op.create_table(
        "Document",
        _key("DocId"),
        sa.Column("DocName", _string(255), nullable=True),
        sa.Column("FileName", _string(255), nullable=True),
        sa.Column("FileType", _string(50), nullable=True),
        sa.Column("FileDescription", sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column("Content", sa.LargeBinary(), nullable=True),
        sa.Column("DocFileType", _string(100), nullable=True),
        schema=SCHEMA,
    )


def downgrade() -> None:
    for table in [
        "Document", "PetCareCenterBusinessHours", "PetCareCenterImages", "PetCareCenterPets",
        "PetCareCenterServices", "PetCareCenter", "Manager", "PetService", "PetOwnerPets",
        "PetOwner", "Pet",
    ]:
        op.drop_table(table, schema=SCHEMA)
