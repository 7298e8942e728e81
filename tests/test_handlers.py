import json

import pytest

from jobboard.handlers import (
    Request,
    Router,
    register_recommend_endpoints,
    register_search_endpoints,
)
from jobboard.models.search import SearchResult
from jobboard.models.vacancy import Vacancy
from jobboard.recommend_service import NoRecommendationError, NoUserError
from jobboard.search_service import UnknownRequestError


class FakeSearch:
    def __init__(self, result=None, error=None):
        self.result = result if result is not None else SearchResult()
        self.error = error
        self.calls = []

    def search(self, search_type, request, since, desc):
        self.calls.append((search_type, request, since, desc))
        if self.error is not None:
            raise self.error
        return self.result


class FakeRecommend:
    def __init__(self, result=None, error=None):
        self.result = result if result is not None else []
        self.error = error
        self.calls = []

    def get_recommended_vacancies(self, user_id, page_number):
        self.calls.append((user_id, page_number))
        if self.error is not None:
            raise self.error
        return self.result


SEARCH_URL = "/api/search?type=type&request=request&since=1&desc=true"


def search_router(use_case):
    router = Router("/api")
    register_search_endpoints(router, use_case)
    return router


def recommend_router(use_case):
    router = Router("/api")
    register_recommend_endpoints(router, use_case)
    return router


def test_search_ok():
    use_case = FakeSearch()
    response = search_router(use_case).dispatch(Request("GET", SEARCH_URL))
    assert response.status == 200
    assert use_case.calls == [("type", "request", "1", "true")]
    assert json.loads(response.body) == {
        "persons": None,
        "organizations": None,
        "vacancies": None,
    }


def test_search_wrong_request():
    use_case = FakeSearch(error=UnknownRequestError())
    response = search_router(use_case).dispatch(Request("GET", SEARCH_URL))
    assert response.status == 400
    assert response.body == ""


def test_search_failed():
    use_case = FakeSearch(error=RuntimeError(""))
    response = search_router(use_case).dispatch(Request("GET", SEARCH_URL))
    assert response.status == 500


def test_search_missing_values_are_empty():
    use_case = FakeSearch()
    response = search_router(use_case).dispatch(Request("GET", "/api/search"))
    assert response.status == 200
    assert use_case.calls == [("", "", "", "")]


def test_search_result_body():
    result = SearchResult(vacancies=[Vacancy(id=1, name="dev")])
    response = search_router(FakeSearch(result=result)).dispatch(Request("GET", SEARCH_URL))
    assert json.loads(response.body)["vacancies"] == [
        {"id": 1, "organization": {}, "name": "dev"}
    ]


def test_router_unknown_path():
    response = search_router(FakeSearch()).dispatch(Request("GET", "/api/nothing"))
    assert response.status == 404


def test_router_wrong_method():
    response = search_router(FakeSearch()).dispatch(Request("POST", SEARCH_URL))
    assert response.status == 405
    assert response.headers["Allow"] == "GET"


def test_router_assigns_request_id():
    request = Request("GET", SEARCH_URL)
    response = search_router(FakeSearch()).dispatch(request)
    assert response.status == 200
    request_id = request.context["rID"]
    assert isinstance(request_id, str)
    assert len(request_id) > 0


def test_request_query_parsing():
    request = Request("GET", "/a?x=1&y=&x=2", query={"y": "set"})
    assert request.path == "/a"
    assert request.query == {"x": "1", "y": "set"}


def test_router_handler_exception_is_500():
    router = Router()

    def broken(request):
        raise RuntimeError("boom")

    router.add_route("GET", "/x", broken)
    assert router.dispatch(Request("GET", "/x")).status == 500


@pytest.mark.parametrize(
    "page, expected",
    [("3", 3), ("0", 1), ("abc", 1), ("", 1), ("-2", 1), ("+2", 1)],
)
def test_recommend_page_number(page, expected):
    use_case = FakeRecommend()
    request = Request("GET", "/api/recommendation", query={"page": page}, context={"userID": 7})
    response = recommend_router(use_case).dispatch(request)
    assert response.status == 200
    assert use_case.calls == [(7, expected)]


def test_recommend_success_body():
    use_case = FakeRecommend(result=[Vacancy(id=1, name="dev")])
    request = Request("GET", "/api/recommendation?page=1", context={"userID": 1})
    response = recommend_router(use_case).dispatch(request)
    assert response.status == 200
    assert response.body == '[{"id":1,"organization":{},"name":"dev"}]'


def test_recommend_no_user():
    use_case = FakeRecommend(error=NoUserError())
    request = Request("GET", "/api/recommendation", context={"userID": 1})
    response = recommend_router(use_case).dispatch(request)
    assert response.status == 404
    assert json.loads(response.body) == {"message": "no user"}


def test_recommend_no_recommendation():
    use_case = FakeRecommend(error=NoRecommendationError())
    request = Request("GET", "/api/recommendation", context={"userID": 1})
    response = recommend_router(use_case).dispatch(request)
    assert response.status == 200
    assert response.body == "[]"


def test_recommend_failure():
    use_case = FakeRecommend(error=RuntimeError("db down"))
    request = Request("GET", "/api/recommendation", context={"userID": 1})
    response = recommend_router(use_case).dispatch(request)
    assert response.status == 500
    assert json.loads(response.body) == {"message": "db down"}


def test_recommend_requires_user():
    use_case = FakeRecommend()
    response = recommend_router(use_case).dispatch(Request("GET", "/api/recommendation"))
    assert response.status == 401
    assert use_case.calls == []