from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from enterprise_directory.models.employee import EmployeeModel

BASE_FIELDS = {
    "firstName": "Peter",
    "lastName": "Jones",
    "email": "peter.jones@example.com",
    "department": "Sales",
    "jobTitle": "Representative",
    "status": "Active",
    "hireDate": "2024-01-01T00:00:00Z",
}


def test_full_time_model_accepts_salary():
    model = EmployeeModel(**BASE_FIELDS, employmentType="FullTime", salary="65000")

    assert model.salary == Decimal("65000")
    assert model.hourly_rate is None
    assert model.first_name == "Peter"


def test_part_time_model_accepts_hourly_rate():
    model = EmployeeModel(**BASE_FIELDS, employmentType="PartTime", hourlyRate="22.75")

    assert model.hourly_rate == Decimal("22.75")
    assert model.salary is None


def test_model_accepts_snake_case_names():
    model = EmployeeModel(
        first_name="Peter",
        last_name="Jones",
        email="peter.jones@example.com",
        department="Sales",
        job_title="Representative",
        status="Active",
        hire_date="2024-01-01T00:00:00Z",
        employment_type="FullTime",
        salary=1,
    )
    assert model.job_title == "Representative"


def test_model_serializes_camel_case():
    model = EmployeeModel(**BASE_FIELDS, employmentType="PartTime", hourlyRate="10")
    data = model.model_dump(by_alias=True)

    assert "hourlyRate" in data
    assert "employmentType" in data
    assert "firstName" in data


def test_full_time_without_salary_fails():
    with pytest.raises(ValidationError) as exc_info:
        EmployeeModel(**BASE_FIELDS, employmentType="FullTime")
    assert "Salary is required for Full-Time employees" in str(exc_info.value)


def test_full_time_with_hourly_rate_fails():
    with pytest.raises(ValidationError) as exc_info:
        EmployeeModel(**BASE_FIELDS, employmentType="FullTime", salary="1000", hourlyRate="12")
    assert "Hourly rate must not be set" in str(exc_info.value)


def test_part_time_without_hourly_rate_fails():
    with pytest.raises(ValidationError) as exc_info:
        EmployeeModel(**BASE_FIELDS, employmentType="PartTime")
    assert "Hourly rate is required for Part-Time employees" in str(exc_info.value)


def test_part_time_with_salary_fails():
    with pytest.raises(ValidationError) as exc_info:
        EmployeeModel(**BASE_FIELDS, employmentType="PartTime", hourlyRate="12", salary="1000")
    assert "Salary must not be set" in str(exc_info.value)


def test_unknown_employment_type_fails():
    with pytest.raises(ValidationError) as exc_info:
        EmployeeModel(**BASE_FIELDS, employmentType="Contractor", salary="1000")
    assert "Unknown employment type" in str(exc_info.value)


@pytest.mark.parametrize("salary", ["0", "-5"])
def test_non_positive_salary_fails(salary):
    with pytest.raises(ValidationError):
        EmployeeModel(**BASE_FIELDS, employmentType="FullTime", salary=salary)


@pytest.mark.parametrize("salary", ["0.001", "1000.005", "12345678901234567"])
def test_salary_beyond_column_precision_fails(salary):
    with pytest.raises(ValidationError):
        EmployeeModel(**BASE_FIELDS, employmentType="FullTime", salary=salary)


def test_hourly_rate_with_cents_is_accepted():
    model = EmployeeModel(**BASE_FIELDS, employmentType="PartTime", hourlyRate="19.99")
    assert model.hourly_rate == Decimal("19.99")


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("firstName", ""),
        ("lastName", "x" * 51),
        ("department", "x" * 51),
        ("status", "x" * 21),
        ("email", "not-an-email"),
    ],
)
def test_common_field_constraints(field, value):
    data = {**BASE_FIELDS, field: value}
    with pytest.raises(ValidationError):
        EmployeeModel(**data, employmentType="FullTime", salary="1000")
