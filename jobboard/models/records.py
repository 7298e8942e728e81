"""Database row records and conversions to and from the API models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from jobboard.models.common import ZERO_TIME
from jobboard.models.summary import Author, Education, Experience, Summary
from jobboard.models.user import Organization, Person
from jobboard.models.vacancy import Vacancy, VacancyOrganization

_USER_FIELDS = ("id", "login", "password", "tag", "email", "phone", "registered", "avatar")
_CONTACT_FIELDS = ("id", "tag", "email", "phone", "avatar")
_PERSON_FIELDS = ("last_name", "gender", "birthday")
_ORGANIZATION_FIELDS = ("name", "site", "about")
_SUMMARY_FIELDS = ("id", "keywords", "name", "salary_from", "salary_to")
_EDUCATION_FIELDS = ("institution", "speciality", "type")
_EXPERIENCE_FIELDS = ("company_name", "role", "responsibilities")
_VACANCY_FIELDS = (
    "id",
    "name",
    "description",
    "salary_from",
    "salary_to",
    "with_tax",
    "responsibilities",
    "conditions",
    "keywords",
)


@dataclass
class SummaryRecord:
    id: int = 0
    author_id: int = 0
    keywords: str = ""
    name: str = ""
    salary_from: int = 0
    salary_to: int = 0


@dataclass
class EducationRecord:
    summary_id: int = 0
    institution: str = ""
    speciality: str = ""
    graduated: datetime | None = None
    type: str = ""


@dataclass
class ExperienceRecord:
    summary_id: int = 0
    company_name: str = ""
    role: str = ""
    responsibilities: str = ""
    start: datetime | None = None
    stop: datetime | None = None


@dataclass
class UserRecord:
    id: int = 0
    login: str = ""
    password: str = ""
    organization_id: int = 0
    person_id: int = 0
    tag: str = ""
    email: str = ""
    phone: str = ""
    registered: datetime = ZERO_TIME
    avatar: str = ""


@dataclass
class PersonRecord:
    id: int = 0
    name: str = ""
    last_name: str = ""
    gender: str = ""
    birthday: datetime = ZERO_TIME


@dataclass
class OrganizationRecord:
    id: int = 0
    name: str = ""
    site: str = ""
    about: str = ""


@dataclass
class VacancyRecord:
    id: int = 0
    organization_id: int = 0
    name: str = ""
    description: str = ""
    salary_from: int = 0
    salary_to: int = 0
    with_tax: bool = False
    responsibilities: str = ""
    conditions: str = ""
    keywords: str = ""


def _pick(source: Any, names: Iterable[str]) -> dict[str, Any]:
    """Collect the named attributes of ``source`` as keyword arguments."""
    return {name: getattr(source, name) for name in names}


def _nullable(value: datetime) -> datetime | None:
    return None if value == ZERO_TIME else value


def _or_zero(value: datetime | None) -> datetime:
    return ZERO_TIME if value is None else value


def to_pg_summary(
    summary: Summary,
) -> tuple[SummaryRecord, list[EducationRecord], list[ExperienceRecord]]:
    """Split a summary into its row and its education and experience rows."""
    record = SummaryRecord(author_id=summary.author.id, **_pick(summary, _SUMMARY_FIELDS))
    educations = [
        EducationRecord(
            summary_id=record.id,
            graduated=_nullable(education.graduated),
            **_pick(education, _EDUCATION_FIELDS),
        )
        for education in summary.educations or ()
    ]
    experiences = [
        ExperienceRecord(
            summary_id=record.id,
            start=_nullable(experience.start),
            stop=_nullable(experience.stop),
            **_pick(experience, _EXPERIENCE_FIELDS),
        )
        for experience in summary.experiences or ()
    ]
    return record, educations, experiences


def to_base_summary(
    summary: SummaryRecord,
    educations: list[EducationRecord],
    experiences: list[ExperienceRecord],
    user: UserRecord,
    person: PersonRecord,
) -> Summary:
    """Assemble a summary from its rows and its author's rows."""
    education_models = [
        Education(graduated=_or_zero(row.graduated), **_pick(row, _EDUCATION_FIELDS))
        for row in educations
    ]
    experience_models = [
        Experience(
            start=_or_zero(row.start),
            stop=_or_zero(row.stop),
            **_pick(row, _EXPERIENCE_FIELDS),
        )
        for row in experiences
    ]
    author = Author(
        first_name=person.name,
        **_pick(user, _CONTACT_FIELDS),
        **_pick(person, _PERSON_FIELDS),
    )
    return Summary(
        author=author,
        educations=education_models or None,
        experiences=experience_models or None,
        **_pick(summary, _SUMMARY_FIELDS),
    )


def _user_record(account: Person | Organization) -> UserRecord:
    return UserRecord(**_pick(account, _USER_FIELDS))


def to_pg_person(person: Person) -> tuple[UserRecord, PersonRecord]:
    """Split a person into its user row and person row."""
    return _user_record(person), PersonRecord(
        name=person.first_name, **_pick(person, _PERSON_FIELDS)
    )


def to_pg_organization(organization: Organization) -> tuple[UserRecord, OrganizationRecord]:
    """Split an organization into its user row and organization row."""
    return _user_record(organization), OrganizationRecord(
        **_pick(organization, _ORGANIZATION_FIELDS)
    )


def to_base_person(user: UserRecord, person: PersonRecord) -> Person:
    return Person(
        first_name=person.name,
        **_pick(user, _USER_FIELDS),
        **_pick(person, _PERSON_FIELDS),
    )


def to_base_organization(user: UserRecord, organization: OrganizationRecord) -> Organization:
    return Organization(
        **_pick(user, _USER_FIELDS),
        **_pick(organization, _ORGANIZATION_FIELDS),
    )


def to_pg_vacancy(vacancy: Vacancy) -> VacancyRecord:
    return VacancyRecord(
        organization_id=vacancy.organization.id, **_pick(vacancy, _VACANCY_FIELDS)
    )


def to_base_vacancy(
    vacancy: VacancyRecord, user: UserRecord, organization: OrganizationRecord
) -> Vacancy:
    """Assemble a vacancy from its row and its organization's rows."""
    return Vacancy(
        organization=VacancyOrganization(
            name=organization.name,
            site=organization.site,
            **_pick(user, _CONTACT_FIELDS),
        ),
        **_pick(vacancy, _VACANCY_FIELDS),
    )