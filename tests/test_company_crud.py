"""
Test suite for the company repository (jobly.crud.company).
"""

import pytest

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql import CompanyFilters
from jobly.crud import company as company_crud
from jobly.crud import job as job_crud
from jobly.schemas.company import Company, CompanyCreate


class TestCreate:

    new_company = CompanyCreate(
        handle="new",
        name="New",
        description="New Description",
        num_employees=1,
        logo_url="http://new.img",
    )

    def test_create_works(self, db_session, seed):
        company = company_crud.create(db_session, self.new_company)

        assert company == Company(
            handle="new",
            name="New",
            description="New Description",
            num_employees=1,
            logo_url="http://new.img",
        )
        assert company_crud.get(db_session, "new").name == "New"

    def test_duplicate_handle(self, db_session, seed):
        company_crud.create(db_session, self.new_company)

        with pytest.raises(BadRequestError):
            company_crud.create(db_session, self.new_company)

    def test_duplicate_name(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.create(
                db_session,
                CompanyCreate(handle="c9", name="C1", description="Another C1"),
            )


class TestFindAll:

    def test_no_filter(self, db_session, seed):
        companies = company_crud.find_all(db_session)

        assert [c.handle for c in companies] == ["c1", "c2", "c3"]
        assert companies[0] == Company(
            handle="c1",
            name="C1",
            description="Desc1",
            num_employees=1,
            logo_url="http://c1.img",
        )

    def test_name_like(self, db_session, seed):
        companies = company_crud.find_all(db_session, CompanyFilters(name_like="2"))

        assert [c.handle for c in companies] == ["c2"]

    def test_name_like_wildcards_are_literal(self, db_session, seed):
        assert company_crud.find_all(db_session, CompanyFilters(name_like="%")) == []
        assert company_crud.find_all(db_session, CompanyFilters(name_like="_")) == []

    def test_min_employees(self, db_session, seed):
        companies = company_crud.find_all(db_session, CompanyFilters(min_employees=2))

        assert [c.handle for c in companies] == ["c2", "c3"]

    def test_max_employees(self, db_session, seed):
        companies = company_crud.find_all(db_session, CompanyFilters(max_employees=2))

        assert [c.handle for c in companies] == ["c1", "c2"]

    def test_all_filters(self, db_session, seed):
        companies = company_crud.find_all(
            db_session,
            CompanyFilters(name_like="1", min_employees=1, max_employees=2),
        )

        assert [c.handle for c in companies] == ["c1"]

    def test_min_over_max(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.find_all(db_session, CompanyFilters(min_employees=3, max_employees=1))


class TestGet:

    def test_get_includes_jobs(self, db_session, seed):
        company = company_crud.get(db_session, "c1")

        assert company.handle == "c1"
        assert len(company.jobs) == 1
        assert company.jobs[0].id == seed["j1"]
        assert company.jobs[0].equity == "0.1"

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "nope")


class TestUpdate:

    def test_update_works(self, db_session, seed):
        company = company_crud.update(
            db_session,
            "c1",
            {"name": "New", "description": "New Description", "numEmployees": 10, "logoUrl": "http://new.img"},
        )

        assert company == Company(
            handle="c1",
            name="New",
            description="New Description",
            num_employees=10,
            logo_url="http://new.img",
        )

    def test_null_fields(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"numEmployees": None, "logoUrl": None})

        assert company.num_employees is None
        assert company.logo_url is None
        assert company.name == "C1"

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "x"})

    def test_no_data(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {})

    def test_handle_change_rejected(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {"handle": "c9"})

    def test_name_clash(self, db_session, seed):
        with pytest.raises(BadRequestError):
            company_crud.update(db_session, "c1", {"name": "C2"})


class TestRemove:

    def test_remove_cascades_to_jobs(self, db_session, seed):
        company_crud.remove(db_session, "c1")

        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "c1")
        with pytest.raises(NotFoundError):
            job_crud.get(db_session, seed["j1"])

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")
