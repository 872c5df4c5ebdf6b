"""
CRUD operations for Company model.
"""

from typing import Any, List, Mapping, Optional
from sqlalchemy import select, update as sql_update
from sqlalchemy.orm import Session, selectinload

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql import CompanyFilters, company_filter_clauses, sql_for_partial_update
from jobly.models.company import Company
from jobly.schemas.company import Company as CompanyOut, CompanyCreate, CompanyDetail

COMPANY_FIELD_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

UPDATABLE_FIELDS = frozenset({"name", "description", "numEmployees", "logoUrl"})


def create(db: Session, company_data: CompanyCreate) -> CompanyOut:
    """
    Create a new company.

    Raises:
        BadRequestError: If the handle or the name is already taken
    """
    if db.get(Company, company_data.handle) is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")
    if db.scalar(select(Company).where(Company.name == company_data.name)) is not None:
        raise BadRequestError(f"Duplicate company name: {company_data.name}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )

    db.add(db_company)
    db.commit()
    db.refresh(db_company)

    return CompanyOut.model_validate(db_company)


def find_all(db: Session, filters: Optional[CompanyFilters] = None) -> List[CompanyOut]:
    """
    All companies matching `filters`, ordered by name.

    Raises:
        BadRequestError: If minEmployees > maxEmployees
    """
    stmt = select(Company).where(*company_filter_clauses(filters)).order_by(Company.name)
    return [CompanyOut.model_validate(company) for company in db.scalars(stmt)]


def get(db: Session, handle: str) -> CompanyDetail:
    """
    Company with its jobs (id order).

    Raises:
        NotFoundError: If no company has this handle
    """
    stmt = select(Company).where(Company.handle == handle).options(selectinload(Company.jobs))
    company = db.scalar(stmt)
    if company is None:
        raise NotFoundError(f"No company: {handle}")
    return CompanyDetail.model_validate(company)


def update(db: Session, handle: str, data: Mapping[str, Any]) -> CompanyOut:
    """
    Apply a partial update keyed by external field names.

    Raises:
        BadRequestError: Empty patch, or an attempt to change the handle
        NotFoundError: If no company has this handle
    """
    patch = sql_for_partial_update(data, COMPANY_FIELD_MAP, UPDATABLE_FIELDS)

    name = patch.values.get("name")
    if name is not None:
        clash = db.scalar(select(Company).where(Company.name == name, Company.handle != handle))
        if clash is not None:
            raise BadRequestError(f"Duplicate company name: {name}")

    result = db.execute(
        sql_update(Company).where(Company.handle == handle).values(**patch.values),
        execution_options={"synchronize_session": False},
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    return CompanyOut.model_validate(db.get(Company, handle))


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, through the cascade, its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")

    db.delete(company)
    db.commit()
