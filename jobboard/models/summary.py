"""Summary (CV) models, responses to vacancies and their JSON encoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from jobboard.models.common import (
    ZERO_TIME,
    Policy,
    _as_bool,
    _as_int,
    _as_time,
    _as_uint,
    _decode_list,
)
from jobboard.models.vacancy import _field, _Model


def _time(key: str, attr: str | None = None):
    return _field(key, attr, _as_time, always=True)


def _uint(key: str, attr: str | None = None):
    return _field(key, attr, _as_uint)


def _flag(key: str):
    return _field(key, converter=_as_bool)


@dataclass
class Education(_Model):
    institution: str = ""
    speciality: str = ""
    graduated: datetime = ZERO_TIME
    type: str = ""

    _KIND = "education"
    _SPEC = (_field("institution"), _field("speciality"), _time("graduated"), _field("type"))
    _SANITIZED = ("institution", "speciality", "type")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the education's text fields in place."""
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Education:
        return cls._decode(data)


@dataclass
class Experience(_Model):
    company_name: str = ""
    role: str = ""
    responsibilities: str = ""
    start: datetime = ZERO_TIME
    stop: datetime = ZERO_TIME

    _KIND = "experience"
    _SPEC = (
        _field("companyName", "company_name"),
        _field("role"),
        _field("responsibilities"),
        _time("start"),
        _time("stop"),
    )
    _SANITIZED = ("company_name", "role", "responsibilities")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the experience's text fields in place."""
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Experience:
        return cls._decode(data)


@dataclass
class Author(_Model):
    id: int = 0
    tag: str = ""
    email: str = ""
    phone: str = ""
    avatar: str = ""
    first_name: str = ""
    last_name: str = ""
    gender: str = ""
    birthday: datetime = ZERO_TIME

    _KIND = "author"
    _SPEC = (
        _uint("id"),
        _field("tag"),
        _field("email"),
        _field("phone"),
        _field("avatar"),
        _field("firstName", "first_name"),
        _field("lastName", "last_name"),
        _field("gender"),
        _time("birthday"),
    )
    _SANITIZED = ("tag", "email", "phone", "avatar", "first_name", "last_name", "gender")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the author's text fields in place."""
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Author:
        return cls._decode(data)


def _as_author(value: Any, key: str) -> Author:
    return Author.from_dict(value)


def _list_of(model: type) -> Any:
    def convert(value: Any, key: str) -> list:
        items = _decode_list(value, model.from_dict, key) or []
        return [model() if item is None else item for item in items]

    return convert


@dataclass
class Summary(_Model):
    id: int = 0
    author: Author = field(default_factory=Author)
    name: str = ""
    salary_from: int = 0
    salary_to: int = 0
    keywords: str = ""
    educations: list[Education] | None = None
    experiences: list[Experience] | None = None

    _KIND = "summary"
    _SPEC = (
        _uint("id"),
        _field("author", converter=_as_author, always=True),
        _field("name"),
        _field("salaryFrom", "salary_from", _as_int),
        _field("salaryTo", "salary_to", _as_int),
        _field("keywords"),
        _field("educations", converter=_list_of(Education)),
        _field("experiences", converter=_list_of(Experience)),
    )
    _SANITIZED = ("name", "keywords")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the author, name and keywords.

        Education and experience entries are left as they are.
        """
        self.author.sanitize(policy)
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Summary:
        return cls._decode(data)


@dataclass
class SendSummary(_Model):
    vacancy_id: int = 0
    summary_id: int = 0
    user_id: int = 0
    organization_id: int = 0
    interview_date: datetime = ZERO_TIME
    accepted: bool = False
    denied: bool = False

    _KIND = "send summary"
    _SPEC = (
        _uint("vacancyId", "vacancy_id"),
        _uint("summaryId", "summary_id"),
        _uint("user_id"),
        _uint("organizationId", "organization_id"),
        _time("interview_date"),
        _flag("accepted"),
        _flag("denied"),
    )

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> SendSummary:
        return cls._decode(data)


@dataclass
class VacancyResponse(_Model):
    user_id: int = 0
    tag: str = ""
    vacancy_id: int = 0
    summary_id: int = 0
    first_name: str = ""
    last_name: str = ""
    avatar: str = ""
    interview_date: datetime = ZERO_TIME
    accepted: bool = False
    denied: bool = False

    _KIND = "vacancy response"
    _SPEC = (
        _uint("user_id"),
        _field("tag"),
        _uint("vacancyId", "vacancy_id"),
        _uint("summaryId", "summary_id"),
        _field("firstName", "first_name"),
        _field("lastName", "last_name"),
        _field("avatar"),
        _time("interview_date"),
        _flag("accepted"),
        _flag("denied"),
    )
    _SANITIZED = ("tag", "first_name", "last_name", "avatar")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the response's text fields in place."""
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> VacancyResponse:
        return cls._decode(data)


def sanitize_summaries(summaries: Iterable[Summary], policy: Policy) -> None:
    """Sanitise every summary in place."""
    for summary in summaries:
        summary.sanitize(policy)


def sanitize_org_summaries(responses: Iterable[VacancyResponse], policy: Policy) -> None:
    """Sanitise every vacancy response in place."""
    for response in responses:
        response.sanitize(policy)