# models.py
import uuid
from typing import Optional

from sqlalchemy import CHAR, Float, Text, Uuid
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel, Field


class UUIDString(TypeDecorator):
    """UUID stored as its 36-character hyphenated text (``char(36)``).

    Matches tables created by the earlier MySQL/TiDB deployment. PostgreSQL
    keeps its native ``uuid`` type.
    """

    impl = CHAR(36)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(Uuid())
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        if dialect.name == "postgresql":
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


class generate_uuid(FunctionElement):
    """SQL expression that makes the database produce a fresh UUID."""

    type = UUIDString()
    name = "generate_uuid"
    inherit_cache = True


@compiles(generate_uuid)
def _generate_uuid_mysql(element, compiler, **kw):
    return "uuid()"


@compiles(generate_uuid, "postgresql")
def _generate_uuid_postgresql(element, compiler, **kw):
    return "gen_random_uuid()"


@compiles(generate_uuid, "sqlite")
def _generate_uuid_sqlite(element, compiler, **kw):
    # 8-4-4-4-12 lowercase hex, the same text form as uuid()
    return (
        "lower(hex(randomblob(4)) || '-' || hex(randomblob(2)) || '-' || "
        "hex(randomblob(2)) || '-' || hex(randomblob(2)) || '-' || hex(randomblob(6)))"
    )


class Employee(SQLModel, table=True):
    # Rendered into the INSERT only when no id was assigned in Python
    id: Optional[uuid.UUID] = Field(
        default=None,
        primary_key=True,
        sa_type=UUIDString,
        sa_column_kwargs={"default": generate_uuid()},
    )
    name: str = Field(sa_type=Text, nullable=False)
    position: str = Field(sa_type=Text, nullable=False)
    salary: float = Field(sa_type=Float, nullable=False)
