"""Employee transfer model shared by the API and the directory service."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

EMPLOYMENT_TYPE_FULL_TIME = "FullTime"
EMPLOYMENT_TYPE_PART_TIME = "PartTime"
EMPLOYMENT_TYPE_UNKNOWN = "Unknown"

EMPLOYMENT_TYPES = (EMPLOYMENT_TYPE_FULL_TIME, EMPLOYMENT_TYPE_PART_TIME)


class EmployeeModel(BaseModel):
    """Flattened employee carrying the fields of both employment types.

    Exactly one of ``salary`` / ``hourly_rate`` is set, chosen by
    ``employment_type``: full-time employees carry a salary, part-time
    employees an hourly rate.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | None = None
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    department: str = Field(min_length=1, max_length=50)
    job_title: str = Field(min_length=1, max_length=50)
    status: str = Field(min_length=1, max_length=20)
    hire_date: datetime

    employment_type: str
    salary: Decimal | None = Field(default=None, gt=0, max_digits=18, decimal_places=2)
    hourly_rate: Decimal | None = Field(default=None, gt=0, max_digits=18, decimal_places=2)

    @field_validator("email")
    @classmethod
    def _check_email_length(cls, value: str) -> str:
        if len(value) > 100:
            raise ValueError("Email must be at most 100 characters.")
        return value

    @model_validator(mode="after")
    def _check_employment_fields(self) -> EmployeeModel:
        if self.employment_type == EMPLOYMENT_TYPE_FULL_TIME:
            if self.salary is None:
                raise ValueError("Salary is required for Full-Time employees.")
            if self.hourly_rate is not None:
                raise ValueError("Hourly rate must not be set for Full-Time employees.")
        elif self.employment_type == EMPLOYMENT_TYPE_PART_TIME:
            if self.hourly_rate is None:
                raise ValueError("Hourly rate is required for Part-Time employees.")
            if self.salary is not None:
                raise ValueError("Salary must not be set for Part-Time employees.")
        else:
            raise ValueError(
                f"Unknown employment type '{self.employment_type}'. "
                f"Expected one of: {', '.join(EMPLOYMENT_TYPES)}"
            )
        return self
