"""Search use case: dispatches a query to the repository and cleans the results."""

from __future__ import annotations

from typing import Protocol

from jobboard.models.common import Policy
from jobboard.models.search import SearchParams, SearchResult
from jobboard.models.user import Organization, Person
from jobboard.models.vacancy import Vacancy


class UnknownRequestError(ValueError):
    """Raised when the requested search type is not recognised."""

    def __init__(self, message: str = "invalid search parameters") -> None:
        super().__init__(message)


class SearchRepository(Protocol):
    """Storage that can look up persons, organizations and vacancies."""

    def search_persons(self, params: SearchParams) -> list[Person]:
        """Return the persons matching ``params``."""

    def search_organizations(self, params: SearchParams) -> list[Organization]:
        """Return the organizations matching ``params``."""

    def search_vacancies(self, params: SearchParams) -> list[Vacancy]:
        """Return the vacancies matching ``params``."""


class SearchUseCase:
    """Runs searches of one kind or of every kind and sanitises what is found."""

    def __init__(self, repository: SearchRepository, policy: Policy) -> None:
        self._repository = repository
        self._policy = policy

    def search(self, search_type: str, request: str, since: str, desc: str) -> SearchResult:
        """Search by type: "person", "organization", "vacancy" or "" for all three.

        Raises UnknownRequestError for any other type; repository errors propagate.
        """
        params = SearchParams(request=request, since=since, desc=desc)
        result = SearchResult()
        repository = self._repository

        if search_type == "person":
            result.persons = repository.search_persons(params)
        elif search_type == "organization":
            result.organizations = repository.search_organizations(params)
        elif search_type == "vacancy":
            result.vacancies = repository.search_vacancies(params)
        elif search_type == "":
            result.persons = repository.search_persons(params)
            result.organizations = repository.search_organizations(params)
            result.vacancies = repository.search_vacancies(params)
        else:
            raise UnknownRequestError()

        result.sanitize(self._policy)
        return result