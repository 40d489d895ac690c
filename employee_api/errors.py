# errors.py


class EmployeeServiceError(Exception):
    """Base class for errors raised by the employee service."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmployeeNotFoundError(EmployeeServiceError):
    status_code = 404

    def __init__(self, employee_id=None):
        super().__init__("Employee not found")
        self.employee_id = employee_id


class StorageError(EmployeeServiceError):
    """A database write or read failed after the request was accepted."""

    status_code = 500


class StartupError(EmployeeServiceError):
    """The database could not be reached or the schema could not be created."""
