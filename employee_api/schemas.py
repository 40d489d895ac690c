# schemas.py
import uuid
from sqlmodel import SQLModel
from pydantic import ConfigDict


# Shared properties
class EmployeeBase(SQLModel):
    name: str
    position: str
    salary: float

    # JSON types must match exactly: no "60000" or true for salary
    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "example": {
                "name": "John Doe",
                "position": "Developer",
                "salary": 60000,
            }
        }
    )


# Schema for creating an employee; an "id" in the body is dropped
class EmployeeCreate(EmployeeBase):
    pass


# Schema for replacing an employee. Whole-record semantics, so every field is
# required, and the identifier always comes from the path.
class EmployeeUpdate(EmployeeBase):
    pass


# Schema for reading an employee
class EmployeeRead(EmployeeBase):
    id: uuid.UUID

    # Built from stored rows, not from request bodies
    model_config = ConfigDict(
        strict=False,
        json_schema_extra={
            "example": {
                "id": "a1b2c3d4-e5f6-a7b8-c9d0-e1f2a3b4c5d6",
                "name": "John Doe",
                "position": "Developer",
                "salary": 60000,
            }
        }
    )


class Message(SQLModel):
    message: str


class ErrorResponse(SQLModel):
    error: str
