from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from jobtracker.db import models
from jobtracker.db.repositories import applications as applications_repo
from jobtracker.db.repositories.applications import UpdateStatus
from jobtracker.errors import NotFoundError, StorageError
from jobtracker.utils.statuses import ApplicationStatus


def test_create_assigns_id_and_get_returns_record(db, make_application):
    created = make_application(company_name="Microsoft", position="Senior .NET Developer")
    assert created.id is not None
    assert created.updated_at is None
    assert created.version == 1

    fetched = applications_repo.get_application(db, created.id)
    assert fetched is not None
    assert fetched.company_name == "Microsoft"
    assert fetched.status is ApplicationStatus.Applied
    assert fetched.date_applied.tzinfo is not None


def test_ids_are_unique_and_not_reused(db, make_application):
    first = make_application(company_name="A")
    second = make_application(company_name="B")
    assert first.id != second.id

    assert applications_repo.delete_application(db, second.id) is True
    third = make_application(company_name="C")
    assert third.id not in {first.id, second.id}


def test_get_missing_returns_none(db):
    assert applications_repo.get_application(db, 999) is None


def test_exists(db, make_application):
    created = make_application()
    assert applications_repo.application_exists(db, created.id) is True
    assert applications_repo.application_exists(db, created.id + 1000) is False


def test_scan_pagination_totals_and_last_page(db, make_application):
    for i in range(25):
        make_application(company_name=f"Company {i:02d}", days_ago=i)

    page1, total = applications_repo.get_applications(db, page_number=1, page_size=10)
    assert total == 25
    assert len(page1) == 10

    page3, total = applications_repo.get_applications(db, page_number=3, page_size=10)
    assert total == 25
    assert len(page3) == 5

    beyond, total = applications_repo.get_applications(db, page_number=4, page_size=10)
    assert beyond == []
    assert total == 25


def test_scan_orders_by_date_desc_then_company_then_id(db, make_application):
    same_day = models.now_utc() - timedelta(days=3)
    older = make_application(company_name="Zeta", days_ago=10)
    beta = make_application(company_name="Beta", date_applied=same_day)
    alpha_1 = make_application(company_name="Alpha", date_applied=same_day)
    alpha_2 = make_application(company_name="Alpha", date_applied=same_day)
    newest = make_application(company_name="Omega", days_ago=0)

    items, _ = applications_repo.get_applications(db, page_number=1, page_size=50)
    assert [a.id for a in items] == [newest.id, alpha_1.id, alpha_2.id, beta.id, older.id]


def test_pages_do_not_overlap_with_identical_dates(db, make_application):
    same_day = models.now_utc() - timedelta(days=1)
    for _ in range(7):
        make_application(company_name="Same", date_applied=same_day)

    seen = []
    for page in (1, 2, 3):
        items, _ = applications_repo.get_applications(db, page_number=page, page_size=3)
        seen.extend(a.id for a in items)
    assert len(seen) == 7
    assert len(set(seen)) == 7


def test_status_filter(db, make_application):
    make_application(company_name="A", status=ApplicationStatus.Applied)
    make_application(company_name="B", status=ApplicationStatus.Offer)
    make_application(company_name="C", status=ApplicationStatus.Offer)

    items, total = applications_repo.get_applications(
        db, page_number=1, page_size=10, status=ApplicationStatus.Offer
    )
    assert total == 2
    assert {a.company_name for a in items} == {"B", "C"}


def test_search_is_case_insensitive_over_company_position_and_notes(db, make_application):
    make_application(company_name="Google", position="SRE")
    make_application(company_name="Initech", position="Backend engineer")
    make_application(company_name="Hooli", position="PM", notes="Referred by a GOOGLE alum")
    make_application(company_name="Pied Piper", position="CTO", notes=None)

    items, total = applications_repo.get_applications(db, page_number=1, page_size=10, search_term="google")
    assert total == 2
    assert {a.company_name for a in items} == {"Google", "Hooli"}

    items, total = applications_repo.get_applications(db, page_number=1, page_size=10, search_term="ENGINEER")
    assert [a.company_name for a in items] == ["Initech"]


def test_search_combines_with_status(db, make_application):
    make_application(company_name="Google", status=ApplicationStatus.Interview)
    make_application(company_name="Google Cloud", status=ApplicationStatus.Rejected)

    items, total = applications_repo.get_applications(
        db, page_number=1, page_size=10, status=ApplicationStatus.Interview, search_term="google"
    )
    assert total == 1
    assert items[0].company_name == "Google"


def test_blank_search_term_is_ignored(db, make_application):
    make_application(company_name="A")
    make_application(company_name="B")
    _, total = applications_repo.get_applications(db, page_number=1, page_size=10, search_term="   ")
    assert total == 2


def test_search_treats_like_wildcards_literally(db, make_application):
    make_application(company_name="100% Remote Inc")
    make_application(company_name="Remote First")
    items, total = applications_repo.get_applications(db, page_number=1, page_size=10, search_term="100%")
    assert total == 1
    assert items[0].company_name == "100% Remote Inc"


def test_update_stamps_updated_at_and_bumps_version(db, make_application):
    created = make_application()
    created.position = "Staff Engineer"

    result = applications_repo.update_application(db, created)
    assert result.status is UpdateStatus.UPDATED
    assert result.ok
    assert result.application.position == "Staff Engineer"
    assert result.application.updated_at is not None
    assert result.application.version == 2


def test_update_rejects_unsaved_application(db):
    transient = models.JobApplication(company_name="X", position="Y")
    with pytest.raises(ValueError):
        applications_repo.update_application(db, transient)


def test_delete_then_get_and_second_delete(db, make_application):
    created = make_application()
    assert applications_repo.delete_application(db, created.id) is True
    assert applications_repo.get_application(db, created.id) is None
    assert applications_repo.delete_application(db, created.id) is False


def test_counts_by_status_only_includes_present_statuses(db, make_application):
    make_application(status=ApplicationStatus.Applied)
    make_application(status=ApplicationStatus.Applied)
    make_application(status=ApplicationStatus.Offer)

    counts = applications_repo.get_application_counts_by_status(db)
    assert counts == {ApplicationStatus.Applied: 2, ApplicationStatus.Offer: 1}


def test_huge_page_number_returns_empty_page(db, make_application):
    make_application()
    items, total = applications_repo.get_applications(db, page_number=10**18, page_size=50)
    assert items == []
    assert total == 1


def test_search_folds_non_ascii_case(db, make_application):
    make_application(company_name="Zürich Insurance")
    make_application(company_name="Zurich Bank")

    items, total = applications_repo.get_applications(db, page_number=1, page_size=10, search_term="ZÜRICH")
    assert total == 1
    assert items[0].company_name == "Zürich Insurance"

    _, total = applications_repo.get_applications(db, page_number=1, page_size=10, search_term="ünchen")
    assert total == 0


def test_deleted_instance_held_by_caller_stays_readable(db, make_application):
    created = make_application(company_name="Doomed")
    assert applications_repo.delete_application(db, created.id) is True
    # the session dropped the row instead of leaving an expired ghost behind
    assert created.company_name == "Doomed"
    assert applications_repo.get_application(db, created.id) is None


def test_storage_failures_raise_storage_error():
    # Fresh database without the schema: every query fails
    broken_engine = create_engine("sqlite://")
    session = sessionmaker(bind=broken_engine)()
    try:
        with pytest.raises(StorageError):
            applications_repo.get_application(session, 1)
        with pytest.raises(StorageError):
            applications_repo.get_application_counts_by_status(session)
        with pytest.raises(StorageError):
            applications_repo.delete_application(session, 1)
    finally:
        session.close()
        broken_engine.dispose()


def test_raise_for_status_maps_not_found(db):
    result = applications_repo.UpdateResult(UpdateStatus.NOT_FOUND, 42)
    assert not result.ok
    with pytest.raises(NotFoundError) as exc_info:
        result.raise_for_status()
    assert exc_info.value.application_id == 42
