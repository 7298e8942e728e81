import pytest

from jobboard.models.search import SearchParams
from jobboard.models.user import Organization, Person
from jobboard.models.vacancy import Vacancy, VacancyOrganization
from jobboard.search_repository import PostgresSearchRepository


class FakeCursor:
    def __init__(self, connection):
        self._connection = connection
        self._rows = []

    def execute(self, query, params=None):
        fragment, outcome = self._connection.script.pop(0)
        self._connection.executed.append((query, params))
        if fragment not in query:
            raise AssertionError(f"unexpected query: {query}")
        if isinstance(outcome, Exception):
            raise outcome
        self._rows = list(outcome)

    def fetchall(self):
        return self._rows

    def close(self):
        self._connection.closed_cursors += 1


class FakeConnection:
    def __init__(self, *script):
        self.script = list(script)
        self.executed = []
        self.closed_cursors = 0

    def cursor(self):
        return FakeCursor(self)


PARAMS = SearchParams(request="req", since="1", desc="true")
EXPECTED_ARGS = {"request": "req", "limit": 10, "offset": 10}


def test_search_persons():
    conn = FakeConnection(
        ("SELECT users.id as userId, p.name, p.surname, tag, avatar",
         [(1, "first", "name", "tag", "")])
    )
    result = PostgresSearchRepository(conn).search_persons(PARAMS)
    assert result == [Person(id=1, first_name="first", last_name="name", tag="tag")]
    query, args = conn.executed[0]
    assert args == EXPECTED_ARGS
    assert "ORDER BY p.name desc" in query
    assert conn.closed_cursors == 1


def test_search_persons_failed():
    conn = FakeConnection(("p.name, p.surname", RuntimeError("")))
    with pytest.raises(RuntimeError):
        PostgresSearchRepository(conn).search_persons(PARAMS)
    assert conn.executed[0][1] == EXPECTED_ARGS


def test_search_organization():
    conn = FakeConnection(
        ("SELECT users.id as userId, name, tag, avatar", [(1, "name", "tag", "")])
    )
    result = PostgresSearchRepository(conn).search_organizations(PARAMS)
    assert result == [Organization(id=1, name="name", tag="tag")]
    assert conn.executed[0][1] == EXPECTED_ARGS


def test_search_organization_failed():
    conn = FakeConnection(("SELECT users.id as userId, name, tag, avatar", RuntimeError("")))
    with pytest.raises(RuntimeError):
        PostgresSearchRepository(conn).search_organizations(PARAMS)
    assert conn.executed[0][1] == EXPECTED_ARGS


def test_search_vacancy():
    conn = FakeConnection(
        ("SELECT users.id, users.avatar, o.name, v.id, v.name, v.keywords, v.salary_from, v.salary_to, v.with_tax",
         [(1, "", "name", 3, "vacancy", "word", 50, 100, False)])
    )
    result = PostgresSearchRepository(conn).search_vacancies(PARAMS)
    assert result == [
        Vacancy(
            id=3,
            organization=VacancyOrganization(id=1, name="name"),
            name="vacancy",
            keywords="word",
            salary_from=50,
            salary_to=100,
            with_tax=False,
        )
    ]
    assert conn.executed[0][1] == EXPECTED_ARGS


def test_search_vacancy_failed():
    conn = FakeConnection(("v.salary_from, v.salary_to, v.with_tax", RuntimeError("")))
    with pytest.raises(RuntimeError):
        PostgresSearchRepository(conn).search_vacancies(PARAMS)
    assert conn.executed[0][1] == EXPECTED_ARGS


@pytest.mark.parametrize("desc", ["", "false", "desc"])
def test_anything_but_true_sorts_ascending(desc):
    conn = FakeConnection(("o.name", []))
    result = PostgresSearchRepository(conn).search_organizations(
        SearchParams(request="req", since="1", desc=desc)
    )
    assert result == []
    assert "ORDER BY o.name asc" in conn.executed[0][0]


@pytest.mark.parametrize("since", ["", "abc", "1.5"])
def test_invalid_since_means_first_page(since):
    conn = FakeConnection(("p.surname", []))
    PostgresSearchRepository(conn).search_persons(
        SearchParams(request="req", since=since, desc="true")
    )
    assert conn.executed[0][1]["offset"] == 0


def test_params_are_not_modified():
    params = SearchParams(request="req", since="1", desc="true")
    conn = FakeConnection(("p.surname", []))
    PostgresSearchRepository(conn).search_persons(params)
    assert params == SearchParams(request="req", since="1", desc="true")