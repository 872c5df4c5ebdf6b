from typing import List, Optional
from pydantic import Field, StrictInt

from jobly.schemas.base import MAX_INT, CamelModel, RequestModel
from jobly.schemas.job import JobSummary

URL_PATTERN = r"^https?://\S+$"


class CompanyCreate(RequestModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[StrictInt] = Field(None, ge=0, le=MAX_INT)
    logo_url: Optional[str] = Field(None, pattern=URL_PATTERN)


class CompanyUpdate(RequestModel):
    """Schema for a partial company update; the handle cannot change"""
    # null is rejected for these; omit them to leave them unchanged
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[StrictInt] = Field(None, ge=0, le=MAX_INT)
    logo_url: Optional[str] = Field(None, pattern=URL_PATTERN)


class Company(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(Company):
    """Company with its job postings"""
    jobs: List[JobSummary] = []


class CompanyResponse(CamelModel):
    company: Company


class CompanyDetailResponse(CamelModel):
    company: CompanyDetail


class CompanyListResponse(CamelModel):
    companies: List[Company]
