"""Recommendation use case: personal picks padded out with popular vacancies."""

from __future__ import annotations

from typing import Protocol

from jobboard.models.vacancy import Vacancy

PAGE_SIZE = 10


class RecommendError(Exception):
    """Base class for recommendation errors."""


class NoRecommendationError(RecommendError):
    """Raised when there is nothing to recommend."""

    def __init__(self, message: str = "no recommend") -> None:
        super().__init__(message)


class NoUserError(RecommendError):
    """Raised when the user asking for recommendations cannot be found."""

    def __init__(self, message: str = "no user") -> None:
        super().__init__(message)


class RecommendRepository(Protocol):
    """Storage that can list popular and personally recommended vacancies."""

    def get_popular_vacancies(self, limit: int, offset: int) -> list[Vacancy]:
        """Return a page of popular vacancies."""

    def get_recommended_vacancies(
        self, user_id: int, limit: int, offset: int
    ) -> tuple[list[Vacancy], int]:
        """Return a page of recommended vacancies and how many were found."""


class RecommendUseCase:
    """Serves pages of vacancies recommended to a user."""

    def __init__(self, repository: RecommendRepository) -> None:
        self._repository = repository

    def get_recommended_vacancies(self, user_id: int, page_number: int) -> list[Vacancy]:
        """Return one page of recommendations, filled up with popular vacancies.

        When personal recommendations cannot be made the page is taken from the
        popular vacancies alone. Errors of the popular listing propagate.
        """
        repository = self._repository
        try:
            recommendations, count = repository.get_recommended_vacancies(
                user_id, PAGE_SIZE, page_number * PAGE_SIZE
            )
        except Exception:
            return repository.get_popular_vacancies(PAGE_SIZE, (page_number - 1) * PAGE_SIZE)

        recommendations = list(recommendations)
        if len(recommendations) < PAGE_SIZE:
            # Never ask for a negative offset when the recommendations outnumber
            # the earlier pages.
            offset = max(0, (page_number - 1) * PAGE_SIZE - count)
            recommendations.extend(
                repository.get_popular_vacancies(PAGE_SIZE - len(recommendations), offset)
            )
        return recommendations