"""
CRUD operations for Job model.

Implements the Repository pattern: every function takes a Session and returns
`schemas.job.Job` value objects (equity already rendered as a string), so
callers never hold live ORM rows.
"""

from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy import select, update as sql_update
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql import JobFilters, job_filter_clauses, sql_for_partial_update
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.job import Job as JobOut, JobCreate

# External (JSON) field name -> column name, where they differ
JOB_FIELD_MAP = {"companyHandle": "company_handle"}

UPDATABLE_FIELDS = frozenset({"title", "salary", "equity"})


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _get_row(db: Session, job_id: int) -> Job:
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")
    return job


def create(db: Session, job_data: JobCreate) -> JobOut:
    """
    Create a new job.

    Raises:
        BadRequestError: If the company handle does not exist
    """
    if db.get(Company, job_data.company_handle) is None:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=_to_decimal(job_data.equity),
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return JobOut.model_validate(db_job)


def find_all(db: Session, filters: Optional[JobFilters] = None) -> List[JobOut]:
    """All jobs matching `filters` (every job when None), in id order."""
    stmt = select(Job).where(*job_filter_clauses(filters)).order_by(Job.id)
    return [JobOut.model_validate(job) for job in db.scalars(stmt)]


def get(db: Session, job_id: int) -> JobOut:
    """
    Raises:
        NotFoundError: If no job has this id
    """
    return JobOut.model_validate(_get_row(db, job_id))


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> JobOut:
    """
    Apply a partial update keyed by external field names.

    Fields missing from `data` are left alone; fields present with None are
    cleared. The patch is checked before the id, so an empty or forbidden
    patch is a BadRequestError whether or not the job exists.

    Raises:
        BadRequestError: Empty patch, or a field outside title/salary/equity
        NotFoundError: If no job has this id
    """
    patch = sql_for_partial_update(data, JOB_FIELD_MAP, UPDATABLE_FIELDS)
    values: Dict[str, Any] = dict(patch.values)
    if "equity" in values:
        values["equity"] = _to_decimal(values["equity"])

    result = db.execute(
        sql_update(Job).where(Job.id == job_id).values(**values),
        execution_options={"synchronize_session": False},
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    return get(db, job_id)


def remove(db: Session, job_id: int) -> None:
    """
    Raises:
        NotFoundError: If no job has this id
    """
    db.delete(_get_row(db, job_id))
    db.commit()
