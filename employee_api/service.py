# service.py
import uuid
from typing import List

from .errors import EmployeeNotFoundError
from .models import Employee
from .schemas import EmployeeCreate, EmployeeUpdate
from .storage import EmployeeStore


def parse_employee_id(raw_id: str) -> uuid.UUID:
    """Parse a path identifier; anything that is not a UUID cannot match a row."""
    try:
        return uuid.UUID(raw_id)
    except (ValueError, AttributeError, TypeError):
        raise EmployeeNotFoundError(raw_id) from None


class EmployeeService:
    """The operations behind the /employees endpoints, bound to one store."""

    def __init__(self, store: EmployeeStore):
        self.store = store

    async def start(self) -> None:
        await self.store.create_schema()

    async def close(self) -> None:
        await self.store.engine.dispose()

    async def create(self, payload: EmployeeCreate) -> Employee:
        return await self.store.create(payload)

    async def get(self, raw_id: str) -> Employee:
        return await self.store.get(parse_employee_id(raw_id))

    async def list(self) -> List[Employee]:
        return await self.store.list()

    async def update(self, raw_id: str, payload: EmployeeUpdate) -> Employee:
        return await self.store.replace(parse_employee_id(raw_id), payload)

    async def delete(self, raw_id: str) -> None:
        await self.store.delete(parse_employee_id(raw_id))
