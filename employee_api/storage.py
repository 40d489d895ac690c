# storage.py
import abc
import logging
import uuid
from typing import List, Optional

from sqlmodel import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from .config import Settings
from .database import create_db_and_tables, create_session_factory
from .errors import EmployeeNotFoundError, StorageError
from .models import Employee
from .schemas import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeStore(abc.ABC):
    """Single-row employee operations on top of an async session factory.

    Subclasses only decide who assigns the primary key.
    """

    key_strategy: str

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    @abc.abstractmethod
    def _new_row(self, data: EmployeeCreate) -> Employee:
        """Build the row to insert for ``data``."""

    async def create_schema(self) -> None:
        await create_db_and_tables(self.engine)

    async def create(self, data: EmployeeCreate) -> Employee:
        db_employee = self._new_row(data)
        async with self.session_factory() as session:
            session.add(db_employee)
            await self._commit(session, "create employee", refreshed=db_employee)
        logger.info("Created employee %s", db_employee.id)
        return db_employee

    async def get(self, employee_id: uuid.UUID) -> Employee:
        async with self.session_factory() as session:
            return await self._get_or_raise(session, employee_id)

    async def list(self) -> List[Employee]:
        async with self.session_factory() as session:
            try:
                result = await session.execute(select(Employee))
            except SQLAlchemyError as exc:
                logger.exception("Failed to list employees")
                raise StorageError(f"Failed to list employees: {exc}") from exc
            return list(result.scalars().all())

    async def replace(self, employee_id: uuid.UUID, data: EmployeeUpdate) -> Employee:
        async with self.session_factory() as session:
            db_employee = await self._get_or_raise(session, employee_id)

            # id stays the one from the lookup
            for key, value in data.model_dump().items():
                setattr(db_employee, key, value)

            session.add(db_employee)
            await self._commit(session, "update employee", refreshed=db_employee)
        logger.info("Updated employee %s", employee_id)
        return db_employee

    async def delete(self, employee_id: uuid.UUID) -> None:
        async with self.session_factory() as session:
            db_employee = await self._get_or_raise(session, employee_id)
            await session.delete(db_employee)
            await self._commit(session, "delete employee")
        logger.info("Deleted employee %s", employee_id)

    async def _get_or_raise(self, session: AsyncSession, employee_id: uuid.UUID) -> Employee:
        try:
            db_employee = await session.get(Employee, employee_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to load employee %s", employee_id)
            raise StorageError(f"Failed to load employee: {exc}") from exc
        if db_employee is None:
            raise EmployeeNotFoundError(employee_id)
        return db_employee

    async def _commit(
            self, session: AsyncSession, action: str, refreshed: Optional[Employee] = None
    ) -> None:
        try:
            await session.commit()
            if refreshed is not None:
                await session.refresh(refreshed)
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.exception("Failed to %s", action)
            raise StorageError(f"Failed to {action}: {exc}") from exc


class GeneratedKeyStore(EmployeeStore):
    """Assigns a random UUID in the application before insert (MySQL / TiDB)."""

    key_strategy = "generated"

    def _new_row(self, data: EmployeeCreate) -> Employee:
        return Employee(id=uuid.uuid4(), **data.model_dump())


class DatabaseKeyStore(EmployeeStore):
    """Lets the database generate the key on insert and reads it back (PostgreSQL)."""

    key_strategy = "database"

    def _new_row(self, data: EmployeeCreate) -> Employee:
        return Employee(**data.model_dump())


STORES = {store.key_strategy: store for store in (GeneratedKeyStore, DatabaseKeyStore)}


def build_store(settings: Settings, engine: AsyncEngine) -> EmployeeStore:
    store_class = STORES[settings.resolved_key_strategy]
    logger.info("Using %s (key strategy: %s)", store_class.__name__, store_class.key_strategy)
    return store_class(engine)
