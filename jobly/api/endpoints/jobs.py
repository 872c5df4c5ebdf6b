import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require
from jobly.core.permissions import Action
from jobly.core.sql import JobFilters
from jobly.crud import job as job_crud
from jobly.schemas.base import MAX_INT
from jobly.schemas.job import JobCreate, JobListResponse, JobResponse, JobUpdate

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=JobResponse,
    dependencies=[Depends(require(Action.CREATE_JOB))],
)
def create_job(request: JobCreate, db: Session = Depends(get_db)):
    """
    Create a job posting. Admin only.

    Body: { title, salary, equity, companyHandle }
    """
    job = job_crud.create(db, request)
    logger.info(f"Created job {job.id}: {job.title} ({job.company_handle})")
    return {"job": job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = Query(None, min_length=1),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0, le=MAX_INT),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs, optionally filtered. Open to anyone.

    Args:
        title: Case-insensitive substring of the title
        minSalary: Only jobs paying at least this much
        hasEquity: When true, only jobs offering non-zero equity
    """
    filters = JobFilters(title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": job_crud.find_all(db, filters)}


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID. Open to anyone."""
    return {"job": job_crud.get(db, job_id)}


@router.patch(
    "/{job_id}",
    response_model=JobResponse,
    dependencies=[Depends(require(Action.UPDATE_JOB))],
)
def update_job(job_id: int, request: JobUpdate, db: Session = Depends(get_db)):
    """
    Partially update a job. Admin only.

    Body may hold any of { title, salary, equity }; null clears salary or equity.
    The company handle can never change.
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True, by_alias=True))
    logger.info(f"Updated job {job_id}")
    return {"job": job}


@router.delete("/{job_id}", dependencies=[Depends(require(Action.REMOVE_JOB))])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """Delete a job by ID. Admin only."""
    job_crud.remove(db, job_id)
    logger.info(f"Deleted job {job_id}")
    return {"deleted": str(job_id)}
