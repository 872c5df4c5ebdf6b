from decimal import Decimal
from typing import List, Optional
from pydantic import Field, StrictInt, field_validator

from jobly.schemas.base import MAX_INT, CamelModel, RequestModel


def format_equity(value) -> Optional[str]:
    """
    Render equity as a fixed-point string without trailing zeros.

    Decimal("0.100") -> "0.1", Decimal("0E-10") -> "0", 0.25 -> "0.25".
    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return format(value.normalize(), "f")


class JobCreate(RequestModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[StrictInt] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(RequestModel):
    """Schema for a partial job update; the company handle cannot change"""
    # Typed without Optional: null is rejected, omitting the field leaves it unchanged
    title: str = Field(None, min_length=1)
    salary: Optional[StrictInt] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)


class JobSummary(CamelModel):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def normalize_equity(cls, v):
        return format_equity(v)


class Job(JobSummary):
    """Job value object returned by the repository and the API"""
    company_handle: str


class JobResponse(CamelModel):
    job: Job


class JobListResponse(CamelModel):
    jobs: List[Job]
