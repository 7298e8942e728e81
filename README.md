# jobboard

This package is the core of a job board. It has:

- data models for people, organizations, vacancies and summaries (résumés);
- a search service and a vacancy recommendation service;
- PostgreSQL repositories that back both services;
- request handlers that expose the services over a small router.

It needs nothing outside the Python standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Models (`jobboard.models`)

### `jobboard.models.common`

- `Policy` is an allow-list HTML sanitiser. `ugc_policy()` returns a policy
  suited to user-generated content:
  - it keeps common formatting elements;
  - it drops `script` and `style` elements together with their content;
  - it only allows `http`, `https`, `mailto` and relative URLs;
  - it adds `rel="nofollow"` to links.
- `format_time` and `parse_time` write and read RFC 3339 times. A time that
  is not set is `ZERO_TIME`, which is written as `0001-01-01T00:00:00Z`.
- `to_json` serialises a model, a list of models or plain data to compact
  JSON.
- Small response types: `ResponseBool`, `ResponseID` and `Error`.
- Chat types: `ChatMessage`, `Messages`, `ChatParameters`,
  `SummaryCredentials`, `ConversationTitle` and `conversations_from_json`.

### `jobboard.models.vacancy`

- `Vacancy` and `VacancyOrganization`.
- `sanitize_vacancies` and `vacancies_from_json`.

### `jobboard.models.user`

- `Person`, `Organization`, `UserLogin`, `Favorite`, `ResponseRole` and
  `Role`.
- `sanitize_persons`, `sanitize_organizations`, `persons_from_json` and
  `organizations_from_json`.

### `jobboard.models.summary`

- `Summary`, `Author`, `Education`, `Experience`, `SendSummary` and
  `VacancyResponse`.
- `sanitize_summaries` and `sanitize_org_summaries`.
- `Summary.sanitize` cleans the author, the name and the keywords. It leaves
  education and experience entries as they are.

### `jobboard.models.search`

- `SearchParams`.
- `SearchResult`, which holds lists of persons, organizations and vacancies.
  It has `sanitize` and `to_dict`.

### `jobboard.models.records`

Dataclasses for database rows:

- `UserRecord`, `PersonRecord`, `OrganizationRecord`;
- `VacancyRecord`;
- `SummaryRecord`, `EducationRecord`, `ExperienceRecord`.

Functions that convert between the models and these rows:

- `to_pg_person` and `to_base_person`;
- `to_pg_organization` and `to_base_organization`;
- `to_pg_vacancy` and `to_base_vacancy`;
- `to_pg_summary` and `to_base_summary`.

### JSON conversion

All models except `SearchResult` have a `to_dict()` method. It uses the
field names seen on the wire, such as `firstName` and `salaryFrom`, and
leaves out fields that are empty or zero. Time fields and nested objects are
always written.

Most models also have a `from_dict()` class method. It:

- skips `null` values and unknown keys;
- raises `ValueError` when a value has the wrong type.

Models that carry user text have a `sanitize(policy)` method, which cleans
those fields in place.

## Services

`jobboard.search_service.SearchUseCase(repository, policy).search(search_type, request, since, desc)`
works as follows:

- `search_type` selects what is searched:
  - `"person"`, `"organization"` or `"vacancy"` searches that one kind;
  - `""` searches all three;
  - any other value raises `UnknownRequestError`.
- The results are sanitised with the policy before they are returned.
- The repository can be any object with `search_persons`,
  `search_organizations` and `search_vacancies` methods (see the
  `SearchRepository` protocol).

`jobboard.recommend_service.RecommendUseCase(repository).get_recommended_vacancies(user_id, page_number)`
returns one page of `PAGE_SIZE` (10) vacancies:

- The page is made of personal recommendations.
- If there are too few of them, the page is filled up with popular
  vacancies.
- If the recommendation lookup fails, the whole page comes from the popular
  vacancies.

The errors are `RecommendError` and its subclasses `NoRecommendationError`
and `NoUserError`.

## Repositories

Both repositories take a DB-API connection whose driver uses named
`%(name)s` parameters.

`jobboard.search_repository.PostgresSearchRepository`:

- runs full-text and substring searches;
- returns ten rows per page;
- takes the page number from `since` (a value that is not an integer means
  page 0);
- sorts in descending order when `desc` is `"true"`, ascending otherwise.

`jobboard.recommend_repository.PostgresRecommendRepository(connection, vacancy_repository)`:

- `get_popular_vacancies` lists vacancies by their number of responses. It
  raises `NoRecommendationError` when the page is empty.
- `get_recommended_vacancies` builds a `RecommendationTable` from every
  user's responses. This is user-based collaborative filtering with cosine
  similarity. It then loads the recommended vacancies.
- `vacancy_repository` must provide
  `get_vacancy_organization(organization_id)`. That method returns a
  `(UserRecord, OrganizationRecord)` pair for each vacancy.

## HTTP handlers (`jobboard.handlers`)

`Router(prefix)` matches the exact path first and then the method:

- it answers 404 for an unknown path;
- it answers 405, with an `Allow` header, for a method that is not
  registered;
- it answers 500 when a handler raises.

Each request gets a request id in `request.context["rID"]`.

There are two endpoints:

- `register_search_endpoints(router, use_case)` adds `GET /search`. It reads
  the query values `type`, `request`, `since` and `desc`. It answers 200 with
  the JSON result, 400 for an unknown type and 500 for other errors.
- `register_recommend_endpoints(router, use_case)` adds
  `GET /recommendation`. It reads `page`, which defaults to 1. It answers as
  follows:
  - 401 if `request.context` holds no `"userID"`;
  - 404 when the user is not found;
  - 200 with `[]` when there is nothing to recommend;
  - 200 with the vacancies on success.

## Example

```python
from jobboard.handlers import Request, Router, register_search_endpoints
from jobboard.models.common import ugc_policy
from jobboard.models.vacancy import Vacancy
from jobboard.search_service import SearchUseCase


class InMemoryRepository:
    def __init__(self, vacancies):
        self.vacancies = vacancies

    def search_persons(self, params):
        return []

    def search_organizations(self, params):
        return []

    def search_vacancies(self, params):
        return [v for v in self.vacancies if params.request.lower() in v.name.lower()]


repository = InMemoryRepository(
    [Vacancy(id=1, name="Python developer<script>alert(1)</script>")]
)
router = Router("/api")
register_search_endpoints(router, SearchUseCase(repository, ugc_policy()))

response = router.dispatch(Request("GET", "/api/search?type=vacancy&request=python"))
print(response.status, response.body)
# 200 {"persons":null,"organizations":null,"vacancies":[{"id":1,"organization":{},"name":"Python developer"}]}
```

## What this package does not do

- It has no server or command. `Router.dispatch` turns a `Request` into a
  `Response`, and connecting it to a real HTTP server is left to you.
- It does no authentication. The recommendation endpoint expects the caller
  to put the signed-in person's id in `request.context["userID"]`.
- It opens no database connections and ships no database schema. The
  repositories expect the tables and columns their queries name.
- It does not look up the organization behind a vacancy. You must supply
  `get_vacancy_organization` to `PostgresRecommendRepository`.