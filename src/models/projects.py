"""
Data models for projects and their employee line items.

Project and Employee mirror the stored records. The *Create/*Update models are
the validated input shapes accepted by the repository and the API.
"""

from typing import Literal

from pydantic import BaseModel, Field

from core.config import DEFAULT_CURRENCY, DEFAULT_STATUS

ProjectStatus = Literal["active", "completed", "draft"]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
CURRENCY_PATTERN = r"^[A-Z]{3}$"


class EmployeeCreate(BaseModel):
    """Employee line item as submitted by a client."""

    name: str = Field(min_length=1)
    rate_per_hour: float = Field(ge=0)
    hours: float = Field(ge=0)
    total: float = Field(default=0, ge=0)


class Employee(BaseModel):
    """Stored employee line item. `total` is a cache of rate x hours."""

    id: str
    name: str
    rate_per_hour: float = 0.0
    hours: float = 0.0
    total: float = 0.0


class ProjectBase(BaseModel):
    name: str
    description: str = ""
    customer_name: str = ""
    customer_address: str = ""
    contact_person: str = ""
    email: str = ""
    invoice_number: str = ""
    invoice_date: str = ""
    payment_due_date: str = ""
    work_period: str = ""
    sow_ref: str = ""
    po_number: str = ""
    invoice_purpose: str = ""
    currency: str = DEFAULT_CURRENCY
    status: ProjectStatus = DEFAULT_STATUS


class Project(ProjectBase):
    """A customer engagement with its ordered employee list."""

    id: str
    employees: list[Employee] = []
    total_amount: float = 0.0
    created_at: str = ""
    updated_at: str = ""


class ProjectCreate(BaseModel):
    """Fields required to create a project."""

    name: str = Field(min_length=1)
    description: str = ""
    customer_name: str = Field(min_length=1)
    customer_address: str = Field(min_length=1)
    contact_person: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    invoice_number: str = ""
    invoice_date: str = ""
    payment_due_date: str = ""
    work_period: str = ""
    sow_ref: str = ""
    po_number: str = ""
    invoice_purpose: str = ""
    currency: str = Field(default=DEFAULT_CURRENCY, pattern=CURRENCY_PATTERN)
    status: ProjectStatus = DEFAULT_STATUS
    employees: list[EmployeeCreate] = []


class ProjectUpdate(BaseModel):
    """
    Partial update. Only fields that are set are written.

    When `employees` is present the stored list is replaced wholesale.
    """

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    customer_name: str | None = Field(default=None, min_length=1)
    customer_address: str | None = Field(default=None, min_length=1)
    contact_person: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    invoice_number: str | None = None
    invoice_date: str | None = None
    payment_due_date: str | None = None
    work_period: str | None = None
    sow_ref: str | None = None
    po_number: str | None = None
    invoice_purpose: str | None = None
    currency: str | None = Field(default=None, pattern=CURRENCY_PATTERN)
    status: ProjectStatus | None = None
    employees: list[EmployeeCreate] | None = None
