from datetime import datetime, timezone

from jobboard.models.common import ZERO_TIME
from jobboard.models.records import (
    OrganizationRecord,
    PersonRecord,
    UserRecord,
    to_base_organization,
    to_base_person,
    to_base_summary,
    to_base_vacancy,
    to_pg_organization,
    to_pg_person,
    to_pg_summary,
    to_pg_vacancy,
)
from jobboard.models.summary import Author, Education, Experience, Summary
from jobboard.models.user import Organization, Person
from jobboard.models.vacancy import Vacancy, VacancyOrganization

WHEN = datetime(2018, 9, 1, tzinfo=timezone.utc)


def test_to_pg_summary_marks_zero_times_null():
    summary = Summary(
        id=5,
        author=Author(id=7),
        educations=[Education(institution="inst", graduated=ZERO_TIME)],
        experiences=[Experience(company_name="company", start=WHEN)],
    )
    record, educations, experiences = to_pg_summary(summary)
    assert record.id == 5
    assert record.author_id == 7
    assert educations[0].summary_id == 5
    assert educations[0].graduated is None
    assert experiences[0].start == WHEN
    assert experiences[0].stop is None


def test_to_pg_summary_without_entries():
    _, educations, experiences = to_pg_summary(Summary(id=1))
    assert educations == []
    assert experiences == []


def test_summary_round_trip_through_records():
    author = Author(id=7, tag="tag", email="user@example.com", phone="phone", avatar="avatar",
                    first_name="first", last_name="last", gender="female", birthday=WHEN)
    summary = Summary(
        id=5,
        author=author,
        name="name",
        salary_from=10,
        salary_to=20,
        keywords="keywords",
        educations=[Education(institution="inst", graduated=WHEN)],
        experiences=[Experience(company_name="company", start=WHEN)],
    )
    record, educations, experiences = to_pg_summary(summary)
    user = UserRecord(id=7, tag="tag", email="user@example.com", phone="phone", avatar="avatar")
    person = PersonRecord(name="first", last_name="last", gender="female", birthday=WHEN)
    assert to_base_summary(record, educations, experiences, user, person) == summary


def test_to_base_summary_empty_lists_are_none():
    record, educations, experiences = to_pg_summary(Summary(id=1))
    summary = to_base_summary(record, educations, experiences, UserRecord(), PersonRecord())
    assert summary.educations is None
    assert summary.experiences is None


def test_person_round_trip_through_records():
    password = "password"
    person = Person(id=1, login="login", password=password, tag="tag", email="user@example.com",
                    registered=WHEN, first_name="first", last_name="last", birthday=WHEN)
    user, row = to_pg_person(person)
    assert row.name == "first"
    assert row.id == 0
    assert to_base_person(user, row) == person


def test_organization_round_trip_through_records():
    password = "password"
    organization = Organization(id=2, login="login", password=password, name="name",
                                about="about", site="site", registered=WHEN)
    user, row = to_pg_organization(organization)
    assert row == OrganizationRecord(name="name", site="site", about="about")
    assert to_base_organization(user, row) == organization


def test_vacancy_through_records():
    vacancy = Vacancy(id=3, organization=VacancyOrganization(id=12), name="vacancy",
                      salary_from=50, salary_to=100, keywords="word")
    record = to_pg_vacancy(vacancy)
    assert record.organization_id == 12
    user = UserRecord(id=12, tag="tag", email="org@example.com", avatar="avatar")
    organization = OrganizationRecord(name="name", site="site")
    result = to_base_vacancy(record, user, organization)
    assert result.organization == VacancyOrganization(
        id=12, tag="tag", email="org@example.com", avatar="avatar", name="name", site="site"
    )
    assert (result.id, result.name, result.keywords) == (3, "vacancy", "word")