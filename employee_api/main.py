# main.py
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import schemas
from .config import Settings
from .database import create_engine_from_settings
from .errors import EmployeeServiceError
from .logging_config import setup_logging
from .service import EmployeeService
from .storage import build_store

logger = logging.getLogger(__name__)


def get_service(request: Request) -> EmployeeService:
    """FastAPI dependency returning the service built at startup."""
    return request.app.state.service


router = APIRouter(prefix="/employees", tags=["Employees"])

NOT_FOUND = {404: {"model": schemas.ErrorResponse}}
BAD_REQUEST = {400: {"model": schemas.ErrorResponse}}


# --- API Endpoints ---

@router.post("", response_model=schemas.EmployeeRead, responses=BAD_REQUEST)
async def create_employee_endpoint(
        employee_input: schemas.EmployeeCreate,
        service: EmployeeService = Depends(get_service),
):
    """Create an employee. The identifier is always generated, never taken from the body."""
    return await service.create(employee_input)


@router.get("/{employee_id}", response_model=schemas.EmployeeRead, responses=NOT_FOUND)
async def get_employee_endpoint(
        employee_id: str,
        service: EmployeeService = Depends(get_service),
):
    return await service.get(employee_id)


@router.get("", response_model=List[schemas.EmployeeRead])
async def list_employees_endpoint(service: EmployeeService = Depends(get_service)):
    """Retrieve every employee, in storage order."""
    return await service.list()


async def get_existing_employee(
        employee_id: str,
        service: EmployeeService = Depends(get_service),
):
    """Resolved before the request body is validated, so a missing record is a 404 first."""
    return await service.get(employee_id)


@router.put(
    "/{employee_id}",
    response_model=schemas.EmployeeRead,
    responses={**NOT_FOUND, **BAD_REQUEST},
    dependencies=[Depends(get_existing_employee)],
)
async def update_employee_endpoint(
        employee_id: str,
        updated_details: schemas.EmployeeUpdate,
        service: EmployeeService = Depends(get_service),
):
    """
    Replace every field of an employee.
    An "id" in the body is ignored; the path identifier wins.
    """
    return await service.update(employee_id, updated_details)


@router.delete("/{employee_id}", response_model=schemas.Message, responses=NOT_FOUND)
async def delete_employee_endpoint(
        employee_id: str,
        service: EmployeeService = Depends(get_service),
):
    await service.delete(employee_id)
    return {"message": "Employee deleted"}


# --- Error handlers ---

async def service_error_handler(request: Request, exc: EmployeeServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning("Rejected body on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def create_app(
        settings: Optional[Settings] = None,
        service: Optional[EmployeeService] = None,
) -> FastAPI:
    """Build the application.

    Settings are read from the environment at startup unless given. A ready
    ``service`` may be passed in; otherwise one is built from the settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_settings = settings or Settings.from_env()
        setup_logging(app_settings.log_level)

        app_service = service
        if app_service is None:
            engine = create_engine_from_settings(app_settings)
            app_service = EmployeeService(build_store(app_settings, engine))

        try:
            await app_service.start()
        except Exception:
            await app_service.close()
            raise
        app.state.service = app_service
        logger.info("Employee service ready")

        yield

        await app_service.close()
        logger.info("Employee service stopped")

    app = FastAPI(
        title="Employee API",
        description="CRUD API for employee records on MySQL/TiDB or PostgreSQL.",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.add_exception_handler(EmployeeServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app


app = create_app()
