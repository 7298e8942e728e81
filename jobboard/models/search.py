"""Search parameters and combined search results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jobboard.models.common import Policy, _plain
from jobboard.models.user import Organization, Person, sanitize_organizations, sanitize_persons
from jobboard.models.vacancy import Vacancy, sanitize_vacancies


@dataclass
class SearchResult:
    persons: list[Person] | None = None
    organizations: list[Organization] | None = None
    vacancies: list[Vacancy] | None = None

    def sanitize(self, policy: Policy) -> None:
        sanitize_persons(self.persons or (), policy)
        sanitize_organizations(self.organizations or (), policy)
        sanitize_vacancies(self.vacancies or (), policy)

    def to_dict(self) -> dict[str, Any]:
        return {
            "persons": _plain(self.persons),
            "organizations": _plain(self.organizations),
            "vacancies": _plain(self.vacancies),
        }


@dataclass
class SearchParams:
    request: str = ""
    since: str = ""
    desc: str = ""