"""HTTP endpoints for search and recommendations, with a small router."""

from __future__ import annotations

import itertools
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import parse_qsl

from jobboard.models.common import Error, to_json
from jobboard.recommend_service import (
    NoRecommendationError,
    NoUserError,
    RecommendUseCase,
)
from jobboard.search_service import SearchUseCase, UnknownRequestError

logger = logging.getLogger(__name__)

_UINT64_MAX = 2**64 - 1
_DIGITS = re.compile(r"\d+")
_request_ids = itertools.count(1)


@dataclass
class Request:
    """An incoming request.

    A query string left in ``path`` is moved into ``query``; explicit
    ``query`` entries win over it.
    """

    method: str
    path: str
    query: dict[str, str] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        path, _, query_string = self.path.partition("?")
        self.path = path
        parsed: dict[str, str] = {}
        for key, value in parse_qsl(query_string, keep_blank_values=True):
            parsed.setdefault(key, value)
        parsed.update(self.query)
        self.query = parsed

    def _form_value(self, name: str) -> str:
        return self.query.get(name, "")


@dataclass
class Response:
    status: int = 200
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)


Handler = Callable[[Request], Response]


def _json_response(status: int, value: Any) -> Response:
    return Response(status, to_json(value), {"Content-Type": "application/json"})


class Router:
    """Dispatches requests by exact path under a common prefix, then by method."""

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix.rstrip("/")
        self._routes: dict[str, dict[str, Handler]] = {}

    def add_route(self, method: str, path: str, handler: Handler) -> None:
        """Register ``handler`` for ``method`` requests to ``prefix + path``."""
        self._routes.setdefault(self._prefix + path, {})[method.upper()] = handler

    def dispatch(self, request: Request) -> Response:
        """Route a request: 404 for an unknown path, 405 for a wrong method.

        Every request gets a request id in its context; an exception raised by
        a handler becomes a 500 response.
        """
        request.context.setdefault("rID", str(next(_request_ids)))
        methods = self._routes.get(request.path)
        if methods is None:
            return Response(404)
        handler = methods.get(request.method.upper())
        if handler is None:
            return Response(405, headers={"Allow": ", ".join(sorted(methods))})
        try:
            return handler(request)
        except Exception:
            logger.exception("#%s: handler failed", request.context["rID"])
            return Response(500)


class SearchHandler:
    def __init__(self, use_case: SearchUseCase) -> None:
        self._use_case = use_case

    def search(self, request: Request) -> Response:
        """Run a search from the type, request, since and desc form values."""
        request_id = request.context.get("rID", "")
        try:
            result = self._use_case.search(
                request._form_value("type"),
                request._form_value("request"),
                request._form_value("since"),
                request._form_value("desc"),
            )
        except UnknownRequestError as exc:
            logger.error("#%s: %s", request_id, exc)
            return Response(400)
        except Exception as exc:
            logger.error("#%s: %s", request_id, exc)
            return Response(500)
        return _json_response(200, result)


def _page_number(text: str) -> int:
    """Read the page; anything that is not a positive unsigned integer is page 1."""
    if _DIGITS.fullmatch(text):
        page = int(text)
        if 0 < page <= _UINT64_MAX:
            return page
    return 1


class RecommendHandler:
    def __init__(self, use_case: RecommendUseCase) -> None:
        self._use_case = use_case

    def get_recommended_vacancies(self, request: Request) -> Response:
        """Return a page of vacancies recommended to the signed-in person."""
        request_id = request.context.get("rID", "")
        user_id = request.context.get("userID")
        if user_id is None:
            return _json_response(401, Error(message="person required"))

        page = _page_number(request._form_value("page"))
        try:
            vacancies = self._use_case.get_recommended_vacancies(user_id, page)
        except NoUserError as exc:
            logger.error("#%s: %s", request_id, exc)
            return _json_response(404, Error(message=str(exc)))
        except NoRecommendationError as exc:
            logger.error("#%s: %s", request_id, exc)
            return _json_response(200, [])
        except Exception as exc:
            logger.error("#%s: %s", request_id, exc)
            return _json_response(500, Error(message=str(exc)))
        return _json_response(200, vacancies)


def register_search_endpoints(router: Router, use_case: SearchUseCase) -> None:
    handler = SearchHandler(use_case)
    router.add_route("GET", "/search", handler.search)


def register_recommend_endpoints(router: Router, use_case: RecommendUseCase) -> None:
    handler = RecommendHandler(use_case)
    router.add_route("GET", "/recommendation", handler.get_recommended_vacancies)