import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require
from jobly.core.permissions import Action
from jobly.core.sql import CompanyFilters
from jobly.crud import company as company_crud
from jobly.schemas.base import MAX_INT
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CompanyResponse,
    dependencies=[Depends(require(Action.CREATE_COMPANY))],
)
def create_company(request: CompanyCreate, db: Session = Depends(get_db)):
    """Create a company. Admin only."""
    company = company_crud.create(db, request)
    logger.info(f"Created company {company.handle}")
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    name_like: Optional[str] = Query(None, alias="nameLike", min_length=1),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0, le=MAX_INT),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0, le=MAX_INT),
    db: Session = Depends(get_db),
):
    """List companies by name, optionally filtered by name and size. Open to anyone."""
    filters = CompanyFilters(name_like=name_like, min_employees=min_employees, max_employees=max_employees)
    return {"companies": company_crud.find_all(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company with its jobs. Open to anyone."""
    return {"company": company_crud.get(db, handle)}


@router.patch(
    "/{handle}",
    response_model=CompanyResponse,
    dependencies=[Depends(require(Action.UPDATE_COMPANY))],
)
def update_company(handle: str, request: CompanyUpdate, db: Session = Depends(get_db)):
    """Partially update a company. Admin only. The handle can never change."""
    company = company_crud.update(db, handle, request.model_dump(exclude_unset=True, by_alias=True))
    logger.info(f"Updated company {handle}")
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(require(Action.REMOVE_COMPANY))])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """Delete a company and its jobs. Admin only."""
    company_crud.remove(db, handle)
    logger.info(f"Deleted company {handle}")
    return {"deleted": handle}
