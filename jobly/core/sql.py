"""
SQL helpers shared by the repositories.

Filter builders map a structured filter value to a list of SQLAlchemy
predicates (empty list means "no WHERE clause"). The partial-update assembler
turns a patch keyed by external (camelCase) field names into column
assignments. Neither touches the database, so both are testable on their own.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.sql.elements import ColumnElement

from jobly.core.errors import BadRequestError
from jobly.models.company import Company
from jobly.models.job import Job


@dataclass(frozen=True)
class PartialUpdate:
    """Column assignments for an UPDATE, in the order the patch listed them."""
    values: Dict[str, Any]

    @property
    def set_clause(self) -> str:
        return ", ".join(f'"{column}"=:{column}' for column in self.values)


def sql_for_partial_update(
    data: Mapping[str, Any],
    field_map: Mapping[str, str],
    allowed: Iterable[str],
) -> PartialUpdate:
    """
    Assemble column assignments for a partial update.

    Args:
        data: Patch keyed by external field names; None means "set NULL"
        field_map: External name -> column name, for names that differ
        allowed: External names that may be updated

    Raises:
        BadRequestError: If the patch is empty or names a field outside `allowed`
    """
    if not data:
        raise BadRequestError("No data")

    allowed = set(allowed)
    rejected = sorted(key for key in data if key not in allowed)
    if rejected:
        raise BadRequestError(f"Cannot update field(s): {', '.join(rejected)}")

    return PartialUpdate(values={field_map.get(key, key): value for key, value in data.items()})


@dataclass(frozen=True)
class JobFilters:
    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: Optional[bool] = None


def job_filter_clauses(filters: Optional[JobFilters]) -> List[ColumnElement]:
    clauses: List[ColumnElement] = []
    if filters is None:
        return clauses

    if filters.title is not None:
        clauses.append(Job.title.icontains(filters.title, autoescape=True))
    if filters.min_salary is not None:
        clauses.append(Job.salary >= filters.min_salary)
    if filters.has_equity:
        clauses.append(Job.equity > Decimal("0"))
    return clauses


@dataclass(frozen=True)
class CompanyFilters:
    name_like: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None


def company_filter_clauses(filters: Optional[CompanyFilters]) -> List[ColumnElement]:
    clauses: List[ColumnElement] = []
    if filters is None:
        return clauses

    if (
        filters.min_employees is not None
        and filters.max_employees is not None
        and filters.min_employees > filters.max_employees
    ):
        raise BadRequestError("Min employees cannot be greater than max")

    if filters.name_like is not None:
        clauses.append(Company.name.icontains(filters.name_like, autoescape=True))
    if filters.min_employees is not None:
        clauses.append(Company.num_employees >= filters.min_employees)
    if filters.max_employees is not None:
        clauses.append(Company.num_employees <= filters.max_employees)
    return clauses
