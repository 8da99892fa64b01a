"""Employee directory service: translation, validation and admin-gated CRUD."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from enterprise_directory.core.database import Database
from enterprise_directory.core.exceptions import InvalidArgumentError, UnauthorizedError
from enterprise_directory.entities.employee import Employee, FullTimeEmployee, PartTimeEmployee
from enterprise_directory.models.auth import AuthContext, Roles
from enterprise_directory.models.employee import (
    EMPLOYMENT_TYPE_FULL_TIME,
    EMPLOYMENT_TYPE_PART_TIME,
    EMPLOYMENT_TYPE_UNKNOWN,
    EMPLOYMENT_TYPES,
    EmployeeModel,
)

logger = logging.getLogger(__name__)

_CENT = Decimal("0.01")

_COMMON_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "department",
    "job_title",
    "status",
)


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_positive(value: Decimal | None, field: str, employment: str) -> Decimal:
    if value is None:
        raise InvalidArgumentError(f"{field} is required for {employment} employees.")
    if value <= 0:
        raise InvalidArgumentError(f"{field} must be greater than zero for {employment} employees.")
    # Stored as Numeric(18, 2); anything finer would be rounded on write.
    try:
        cents = value.quantize(_CENT)
    except InvalidOperation as err:
        raise InvalidArgumentError(f"{field} is out of range for {employment} employees.") from err
    if cents != value or cents.adjusted() >= 16:
        raise InvalidArgumentError(
            f"{field} must have at most 16 integer digits and 2 decimal places for {employment} employees."
        )
    return value


def _check_employment_fields(model: EmployeeModel) -> None:
    if model.employment_type == EMPLOYMENT_TYPE_FULL_TIME:
        _require_positive(model.salary, "Salary", "Full-Time")
        if model.hourly_rate is not None:
            raise InvalidArgumentError("Hourly rate must not be set for Full-Time employees.")
    elif model.employment_type == EMPLOYMENT_TYPE_PART_TIME:
        _require_positive(model.hourly_rate, "Hourly rate", "Part-Time")
        if model.salary is not None:
            raise InvalidArgumentError("Salary must not be set for Part-Time employees.")
    else:
        raise InvalidArgumentError(
            f"Unknown employment type '{model.employment_type}'. Expected one of: {', '.join(EMPLOYMENT_TYPES)}"
        )


def _require_admin(auth: AuthContext, action: str) -> None:
    if not auth.has_role(Roles.ADMIN):
        logger.warning("User %s denied: only administrators can %s", auth.id or "<anonymous>", action)
        raise UnauthorizedError(f"Only administrators can {action}.")


def to_model(entity: Employee) -> EmployeeModel:
    data: dict[str, object] = {
        "id": entity.id,
        "hire_date": _as_utc(entity.hire_date),
        "salary": None,
        "hourly_rate": None,
    }
    for field in _COMMON_FIELDS:
        data[field] = getattr(entity, field)

    if isinstance(entity, FullTimeEmployee):
        data["employment_type"] = EMPLOYMENT_TYPE_FULL_TIME
        data["salary"] = entity.salary
    elif isinstance(entity, PartTimeEmployee):
        data["employment_type"] = EMPLOYMENT_TYPE_PART_TIME
        data["hourly_rate"] = entity.hourly_rate
    else:
        logger.warning("Employee %s has unrecognized type %s", entity.id, type(entity).__name__)
        data["employment_type"] = EMPLOYMENT_TYPE_UNKNOWN

    # Stored rows are trusted; skip re-validation so "Unknown" can be represented.
    return EmployeeModel.model_construct(**data)


def to_entity(model: EmployeeModel, existing: Employee | None = None) -> Employee:
    """Apply ``model`` onto ``existing``, or onto a new entity of the model's type.

    An existing entity keeps its concrete type. Its variant-specific value is
    only overwritten when the incoming employment type matches it.
    """
    if model.employment_type == EMPLOYMENT_TYPE_FULL_TIME:
        salary = _require_positive(model.salary, "Salary", "Full-Time")
        entity = existing if existing is not None else FullTimeEmployee()
        if isinstance(entity, FullTimeEmployee):
            entity.salary = salary
        else:
            logger.warning(
                "Employee %s is %s; ignoring salary from a FullTime update",
                entity.id,
                entity.employee_type,
            )
    elif model.employment_type == EMPLOYMENT_TYPE_PART_TIME:
        hourly_rate = _require_positive(model.hourly_rate, "Hourly rate", "Part-Time")
        entity = existing if existing is not None else PartTimeEmployee()
        if isinstance(entity, PartTimeEmployee):
            entity.hourly_rate = hourly_rate
        else:
            logger.warning(
                "Employee %s is %s; ignoring hourly rate from a PartTime update",
                entity.id,
                entity.employee_type,
            )
    else:
        raise InvalidArgumentError(f"Unknown employment type '{model.employment_type}'.")

    for field in _COMMON_FIELDS:
        setattr(entity, field, getattr(model, field))
    entity.hire_date = _as_utc(model.hire_date)
    return entity


class EmployeeService:
    def __init__(self) -> None:
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self.initialized: bool = False

    async def initialize(self, database: Database) -> None:
        if self.initialized:
            return
        if not database.session_factory:
            raise RuntimeError("Database not initialized")
        self.session_factory = database.session_factory
        self.initialized = True
        logger.info("EmployeeService initialized")

    async def close(self) -> None:
        self.session_factory = None
        self.initialized = False

    def _session(self) -> AsyncSession:
        if not self.session_factory:
            raise RuntimeError("EmployeeService not initialized")
        return self.session_factory()

    async def get_all_employees(self) -> list[EmployeeModel]:
        async with self._session() as session:
            result = await session.execute(select(Employee))
            return [to_model(e) for e in result.scalars().all()]

    async def get_employee_by_id(self, employee_id: int) -> EmployeeModel | None:
        async with self._session() as session:
            employee = await session.get(Employee, employee_id)
            if employee is None:
                return None
            return to_model(employee)

    async def count_employees(self) -> int:
        async with self._session() as session:
            result = await session.execute(select(func.count()).select_from(Employee))
            return result.scalar_one()

    async def add_employee(self, model: EmployeeModel, auth: AuthContext) -> EmployeeModel:
        _require_admin(auth, "add employees")
        _check_employment_fields(model)

        entity = to_entity(model)
        now = _utcnow()
        entity.created_at = now
        entity.updated_at = now

        async with self._session() as session:
            session.add(entity)
            await session.commit()
            await session.refresh(entity)
            logger.info("Employee %s added (%s)", entity.id, entity.employee_type)
            return to_model(entity)

    async def update_employee(self, model: EmployeeModel, auth: AuthContext) -> None:
        _require_admin(auth, "update employees")
        _check_employment_fields(model)

        async with self._session() as session:
            existing = await session.get(Employee, model.id) if model.id is not None else None
            if existing is None:
                logger.warning("Employee %s not found; nothing to update", model.id)
                return

            to_entity(model, existing)
            existing.updated_at = _utcnow()
            await session.commit()
            logger.info("Employee %s updated", existing.id)

    async def delete_employee(self, employee_id: int, auth: AuthContext) -> None:
        _require_admin(auth, "delete employees")

        async with self._session() as session:
            employee = await session.get(Employee, employee_id)
            if employee is None:
                logger.warning("Employee %s not found; nothing to delete", employee_id)
                return

            await session.delete(employee)
            await session.commit()
            logger.info("Employee %s deleted", employee_id)

    async def seed_example_employees(self) -> None:
        try:
            if await self.count_employees() > 0:
                return

            now = _utcnow()
            async with self._session() as session:
                for entity in _example_employees():
                    entity.created_at = now
                    entity.updated_at = now
                    session.add(entity)
                await session.commit()
            logger.info("Seeded example employees")
        except Exception:
            logger.exception("Failed to seed example employees")
            raise


def _example_employees() -> list[Employee]:
    def hired(year: int, month: int, day: int) -> datetime:
        return datetime(year, month, day, tzinfo=timezone.utc)

    return [
        FullTimeEmployee(
            first_name="Alice", last_name="Johnson", email="alice.johnson@example.com",
            department="Engineering", job_title="Senior Software Engineer", status="Active",
            hire_date=hired(2019, 3, 15), salary=Decimal("125000.00"),
        ),
        FullTimeEmployee(
            first_name="Bob", last_name="Martinez", email="bob.martinez@example.com",
            department="Sales", job_title="Account Executive", status="Active",
            hire_date=hired(2020, 7, 1), salary=Decimal("85000.00"),
        ),
        PartTimeEmployee(
            first_name="Carol", last_name="Nguyen", email="carol.nguyen@example.com",
            department="Marketing", job_title="Content Writer", status="Active",
            hire_date=hired(2022, 1, 10), hourly_rate=Decimal("38.50"),
        ),
        FullTimeEmployee(
            first_name="David", last_name="Okafor", email="david.okafor@example.com",
            department="Finance", job_title="Financial Analyst", status="On Leave",
            hire_date=hired(2018, 11, 5), salary=Decimal("92000.00"),
        ),
        PartTimeEmployee(
            first_name="Emma", last_name="Schmidt", email="emma.schmidt@example.com",
            department="Customer Support", job_title="Support Specialist", status="Active",
            hire_date=hired(2023, 4, 17), hourly_rate=Decimal("24.00"),
        ),
        FullTimeEmployee(
            first_name="Frank", last_name="Rossi", email="frank.rossi@example.com",
            department="Engineering", job_title="Engineering Manager", status="Active",
            hire_date=hired(2016, 9, 12), salary=Decimal("150000.00"),
        ),
        PartTimeEmployee(
            first_name="Grace", last_name="Kim", email="grace.kim@example.com",
            department="Design", job_title="UX Designer", status="Inactive",
            hire_date=hired(2021, 6, 21), hourly_rate=Decimal("55.00"),
        ),
        FullTimeEmployee(
            first_name="Henry", last_name="Walker", email="henry.walker@example.com",
            department="Human Resources", job_title="HR Generalist", status="Terminated",
            hire_date=hired(2017, 2, 27), salary=Decimal("68000.00"),
        ),
        PartTimeEmployee(
            first_name="Isabel", last_name="Costa", email="isabel.costa@example.com",
            department="Operations", job_title="Logistics Assistant", status="On Leave",
            hire_date=hired(2022, 10, 3), hourly_rate=Decimal("29.75"),
        ),
        FullTimeEmployee(
            first_name="James", last_name="Patel", email="james.patel@example.com",
            department="Engineering", job_title="DevOps Engineer", status="Active",
            hire_date=hired(2021, 2, 8), salary=Decimal("118000.00"),
        ),
    ]


employee_service = EmployeeService()
