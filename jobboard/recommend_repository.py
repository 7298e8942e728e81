"""Vacancy recommendations from users' responses, stored in PostgreSQL."""

from __future__ import annotations

import logging
import math
import re
from collections import defaultdict
from contextlib import closing
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping, Protocol, Sequence

from jobboard.models.records import (
    OrganizationRecord,
    UserRecord,
    VacancyRecord,
    to_base_vacancy,
)
from jobboard.models.vacancy import Vacancy
from jobboard.recommend_service import NoRecommendationError, NoUserError

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?\d+")

_POPULAR_QUERY = """
    SELECT v.id, v.organization_id, v.name, v.description, v.with_tax, v.responsibilities, v.conditions, v.keywords, v.salary_from, v.salary_to, COUNT(*) count
    FROM vacancy v
    JOIN response r ON v.id = r.vacancy_id
    GROUP BY v.id
    ORDER BY count
    LIMIT %(limit)s OFFSET %(offset)s"""

_CHECK_USER_QUERY = "SELECT COUNT(*) <> 0 FROM users WHERE id = %(user_id)s"

_USERS_WITH_RESPONSES_QUERY = """
    SELECT u.id, array_agg(r.vacancy_id)
    FROM users u
    JOIN summary s ON u.id = s.author
    JOIN response r ON s.id = r.summary_id
    GROUP BY u.id
    HAVING u.person_id IS NOT NULL"""

_RECOMMENDATIONS_QUERY = """
    SELECT id, organization_id, name, description, with_tax, responsibilities, conditions, keywords, salary_from, salary_to
    FROM vacancy
    WHERE id = ANY(%(ids)s)
    LIMIT %(limit)s OFFSET %(offset)s"""


@dataclass(frozen=True)
class Recommendation:
    key: Hashable
    score: float


def _cosine(left: Mapping[Hashable, float], right: Mapping[Hashable, float]) -> float:
    dot = sum(value * right.get(key, 0.0) for key, value in left.items())
    norms = math.sqrt(sum(v * v for v in left.values())) * math.sqrt(
        sum(v * v for v in right.values())
    )
    return dot / norms if norms else 0.0


class RecommendationTable:
    """User-based collaborative filtering over item scores."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, dict[Hashable, float]] = {}

    def add(self, key: Hashable, values: Mapping[Hashable, float]) -> None:
        """Store (or replace) the item scores of ``key``."""
        self._entries[key] = dict(values)

    def recommend(self, key: Hashable) -> list[Recommendation]:
        """Rank items ``key`` lacks by the similarity of the users who have them.

        Raises KeyError if ``key`` was never added.
        """
        own = self._entries[key]
        scores: dict[Hashable, float] = defaultdict(float)
        for other, items in self._entries.items():
            if other == key:
                continue
            similarity = _cosine(own, items)
            if similarity <= 0:
                continue
            for item, value in items.items():
                if not own.get(item):
                    scores[item] += value * similarity
        return sorted(
            (Recommendation(item, score) for item, score in scores.items()),
            key=lambda rec: (-rec.score, str(rec.key)),
        )


class VacancyOrganizationSource(Protocol):
    """Looks up the account and organization rows behind a vacancy."""

    def get_vacancy_organization(
        self, organization_id: int
    ) -> tuple[UserRecord, OrganizationRecord]:
        """Return the user row and organization row of an organization."""


def _vacancy_record(row: Sequence[Any]) -> VacancyRecord:
    (
        vacancy_id, organization_id, name, description, with_tax,
        responsibilities, conditions, keywords, salary_from, salary_to,
    ) = row[:10]
    return VacancyRecord(
        id=vacancy_id,
        organization_id=organization_id,
        name=name,
        description=description,
        with_tax=with_tax,
        responsibilities=responsibilities,
        conditions=conditions,
        keywords=keywords,
        salary_from=salary_from,
        salary_to=salary_to,
    )


def _vacancy_keys(raw: Any) -> list[str]:
    """Read an aggregated id array, either as a list or as "{1,2,3}" text."""
    if isinstance(raw, str):
        return raw[1:-1].split(",")
    return [str(item) for item in raw]


def _to_int(key: Any) -> int:
    text = str(key)
    return int(text) if _INTEGER.fullmatch(text) else 0


class PostgresRecommendRepository:
    """Recommendation repository over a DB-API connection."""

    def __init__(self, connection: Any, vacancy_repository: VacancyOrganizationSource) -> None:
        self._connection = connection
        self._vacancy_repository = vacancy_repository

    def _fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list:
        with closing(self._connection.cursor()) as cursor:
            if params is None:
                cursor.execute(query)
            else:
                cursor.execute(query, params)
            return list(cursor.fetchall())

    def _to_vacancies(self, rows: Iterable[Sequence[Any]]) -> list[Vacancy]:
        vacancies = []
        for row in rows:
            record = _vacancy_record(row)
            user, organization = self._vacancy_repository.get_vacancy_organization(
                record.organization_id
            )
            vacancies.append(to_base_vacancy(record, user, organization))
        return vacancies

    def get_popular_vacancies(self, limit: int, offset: int) -> list[Vacancy]:
        """Return vacancies ordered by their number of responses.

        Raises NoRecommendationError if the page is empty.
        """
        rows = self._fetch_all(_POPULAR_QUERY, {"limit": limit, "offset": int(offset)})
        vacancies = self._to_vacancies(rows)
        if not vacancies:
            raise NoRecommendationError()
        return vacancies

    def get_recommended_vacancies(
        self, user_id: int, limit: int, offset: int
    ) -> tuple[list[Vacancy], int]:
        """Return a page of vacancies recommended to ``user_id`` and their count.

        Raises NoUserError if the user lookup fails and NoRecommendationError
        when nothing can be recommended.
        """
        try:
            rows = self._fetch_all(_CHECK_USER_QUERY, {"user_id": user_id})
        except Exception as exc:
            raise NoUserError() from exc
        if not rows:
            raise NoUserError()

        table = RecommendationTable()
        for other_id, raw_vacancies in self._fetch_all(_USERS_WITH_RESPONSES_QUERY):
            table.add(int(other_id), {key: 1.0 for key in _vacancy_keys(raw_vacancies)})

        try:
            recommendations = table.recommend(int(user_id))
        except KeyError as exc:
            raise NoRecommendationError() from exc
        if not recommendations:
            raise NoRecommendationError()

        for rec in recommendations:
            logger.debug("key: %s, score: %f", rec.key, rec.score)
        ids = [_to_int(rec.key) for rec in recommendations]

        rows = self._fetch_all(
            _RECOMMENDATIONS_QUERY, {"ids": ids, "limit": limit, "offset": int(offset)}
        )
        vacancies = self._to_vacancies(rows)
        return vacancies, len(vacancies)