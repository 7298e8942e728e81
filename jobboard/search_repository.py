"""Full-text search over persons, organizations and vacancies in PostgreSQL."""

from __future__ import annotations

import re
from contextlib import closing
from typing import Any, Sequence

from jobboard.models.search import SearchParams
from jobboard.models.user import Organization, Person
from jobboard.models.vacancy import Vacancy, VacancyOrganization

_PAGE_SIZE = 10
_INTEGER = re.compile(r"[+-]?\d+")

_PERSONS_QUERY = """SELECT users.id as userId, p.name, p.surname, tag, avatar
    FROM users
    JOIN person p on users.person_id = p.id
    WHERE to_tsvector('russian', p.name || ' ' || p.surname) @@ plainto_tsquery('russian', %(request)s)
          OR lower(p.name || p.surname) LIKE lower('%%' || %(request)s || '%%')
          OR lower(tag) LIKE lower('%%' || %(request)s || '%%')
          OR %(request)s = ''
    ORDER BY p.name {order}, registered
    LIMIT %(limit)s OFFSET %(offset)s"""

_ORGANIZATIONS_QUERY = """SELECT users.id as userId, name, tag, avatar
    FROM users
    JOIN organization o on users.organization_id = o.id
    WHERE to_tsvector('russian', o.name) @@ plainto_tsquery('russian', %(request)s)
          OR lower(o.name) LIKE lower('%%' || %(request)s || '%%')
          OR lower(tag) LIKE lower('%%' || %(request)s || '%%')
          OR %(request)s = ''
    ORDER BY o.name {order}, registered
    LIMIT %(limit)s OFFSET %(offset)s"""

_VACANCIES_QUERY = """SELECT users.id, users.avatar, o.name, v.id, v.name, v.keywords, v.salary_from, v.salary_to, v.with_tax
    FROM users
    JOIN organization o on users.organization_id = o.id
    JOIN vacancy v on users.id = v.organization_id
    WHERE to_tsvector('russian', v.name) @@ plainto_tsquery('russian', %(request)s)
          OR lower(v.name) LIKE lower('%%' || %(request)s || '%%')
          OR %(request)s = ''
    ORDER BY o.name {order}, v.name
    LIMIT %(limit)s OFFSET %(offset)s"""


def _page(since: str) -> int:
    """Read the page number; anything that is not an integer means page 0."""
    return int(since) if _INTEGER.fullmatch(since) else 0


def _order(desc: str) -> str:
    return "desc" if desc == "true" else "asc"


class PostgresSearchRepository:
    """Search repository over a DB-API connection using named parameters."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def _run(self, template: str, params: SearchParams) -> Sequence[Sequence[Any]]:
        query = template.format(order=_order(params.desc))
        arguments = {
            "request": params.request,
            "limit": _PAGE_SIZE,
            "offset": _page(params.since) * _PAGE_SIZE,
        }
        with closing(self._connection.cursor()) as cursor:
            cursor.execute(query, arguments)
            return cursor.fetchall()

    def search_persons(self, params: SearchParams) -> list[Person]:
        """Return up to ten persons matching the request, paged by ``since``."""
        return [
            Person(id=user_id, first_name=name, last_name=surname, tag=tag, avatar=avatar)
            for user_id, name, surname, tag, avatar in self._run(_PERSONS_QUERY, params)
        ]

    def search_organizations(self, params: SearchParams) -> list[Organization]:
        """Return up to ten organizations matching the request, paged by ``since``."""
        return [
            Organization(id=user_id, name=name, tag=tag, avatar=avatar)
            for user_id, name, tag, avatar in self._run(_ORGANIZATIONS_QUERY, params)
        ]

    def search_vacancies(self, params: SearchParams) -> list[Vacancy]:
        """Return up to ten vacancies matching the request, paged by ``since``."""
        return [
            Vacancy(
                id=vacancy_id,
                organization=VacancyOrganization(id=org_id, avatar=avatar, name=org_name),
                name=name,
                keywords=keywords,
                salary_from=salary_from,
                salary_to=salary_to,
                with_tax=with_tax,
            )
            for (
                org_id, avatar, org_name, vacancy_id, name, keywords,
                salary_from, salary_to, with_tax,
            ) in self._run(_VACANCIES_QUERY, params)
        ]