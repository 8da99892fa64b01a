"""Employee table mapped as single-table inheritance.

Full-time and part-time employees share the ``employees`` table and are told
apart by the ``employee_type`` discriminator column. Each subclass maps exactly
one of ``salary`` / ``hourly_rate``, so a stored row never carries both.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from enterprise_directory.core.database import Base

EMPLOYEE_TYPE_BASE = "Employee"
EMPLOYEE_TYPE_FULL_TIME = "FullTime"
EMPLOYEE_TYPE_PART_TIME = "PartTime"


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[str] = mapped_column(String(50), nullable=False)
    job_title: Mapped[str] = mapped_column(String(50), nullable=False)
    # "Active", "Inactive", "On Leave", "Terminated"
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    hire_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Server default keeps rows written before the audit columns existed loadable.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    employee_type: Mapped[str] = mapped_column(String(20), nullable=False)

    __mapper_args__ = {
        "polymorphic_on": "employee_type",
        "polymorphic_identity": EMPLOYEE_TYPE_BASE,
        # Load salary/hourly_rate with the base row; async sessions cannot lazy-load.
        "with_polymorphic": "*",
    }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} email={self.email!r}>"


class FullTimeEmployee(Employee):
    salary: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=True)

    __mapper_args__ = {"polymorphic_identity": EMPLOYEE_TYPE_FULL_TIME}


class PartTimeEmployee(Employee):
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=True)

    __mapper_args__ = {"polymorphic_identity": EMPLOYEE_TYPE_PART_TIME}
