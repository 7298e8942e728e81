from datetime import datetime, timezone

import pytest

from jobboard.models.common import ZERO_TIME, format_time, to_json, ugc_policy
from jobboard.models.user import (
    Favorite,
    Organization,
    Person,
    ResponseRole,
    Role,
    UserLogin,
    organizations_from_json,
    persons_from_json,
    sanitize_organizations,
    sanitize_persons,
)

WHEN = datetime(2020, 5, 1, 12, 30, tzinfo=timezone.utc)


def _person():
    password = "password"
    return Person(
        id=1,
        login="login",
        password=password,
        tag="tag",
        email="user@example.com",
        phone="phone",
        registered=WHEN,
        avatar="avatar",
        first_name="first",
        last_name="name",
        gender="male",
        birthday=WHEN,
    )


def _organization():
    password = "password"
    return Organization(
        id=1,
        login="login",
        password=password,
        tag="tag",
        email="org@example.com",
        phone="phone",
        registered=WHEN,
        avatar="avatar",
        name="name",
        about="about",
        site="site",
    )


def test_empty_person_keeps_only_times():
    zero = format_time(ZERO_TIME)
    assert Person().to_dict() == {"registered": zero, "birthday": zero}


def test_person_uses_camel_case_keys():
    data = _person().to_dict()
    assert data["firstName"] == "first"
    assert data["lastName"] == "name"
    assert "first_name" not in data


def test_person_round_trip():
    person = _person()
    assert Person.from_dict(person.to_dict()) == person


def test_person_ignores_nulls_and_unknown_keys():
    person = Person.from_dict({"id": 4, "login": None, "extra": 1})
    assert person == Person(id=4)


def test_person_rejects_wrong_type():
    with pytest.raises(ValueError):
        Person.from_dict({"id": "x"})


def test_person_sanitize_leaves_avatar():
    person = Person(first_name="<script>x</script>Bob", avatar="<script>x</script>")
    person.sanitize(ugc_policy())
    assert person.first_name == "Bob"
    assert person.avatar == "<script>x</script>"


def test_organization_round_trip():
    organization = _organization()
    assert Organization.from_dict(organization.to_dict()) == organization


def test_organization_sanitize():
    organization = Organization(about="<script>x</script>about", avatar="<i>a</i>")
    organization.sanitize(ugc_policy())
    assert organization.about == "about"
    assert organization.avatar == "<i>a</i>"


def test_user_login_omits_empty():
    assert UserLogin().to_dict() == {}
    assert UserLogin.from_dict({"login": "login"}) == UserLogin(login="login")


def test_favorite_encodes_only_id_tag_and_kind():
    favorite = Favorite(id=1, tag="t", avatar="a", is_person=True, name="n", surname="s")
    assert favorite.to_dict() == {"id": 1, "tag": "t", "isPerson": True}
    assert Favorite.from_dict({"id": 1, "avatar": "a"}) == Favorite(id=1)


def test_response_role_round_trip():
    role = ResponseRole(id=2, role="person")
    assert ResponseRole.from_dict(role.to_dict()) == role


def test_role_defaults():
    assert Role() == Role(person=False, organization=False)


def test_persons_from_json():
    assert persons_from_json("null") is None
    person = _person()
    decoded = persons_from_json(to_json([None, person]))
    assert decoded == [None, person]


def test_organizations_from_json():
    organization = _organization()
    assert organizations_from_json(to_json([organization])) == [organization]


def test_sanitize_lists():
    persons = [Person(tag="<script>x</script>tag")]
    organizations = [Organization(site="<script>x</script>site")]
    sanitize_persons(persons, ugc_policy())
    sanitize_organizations(organizations, ugc_policy())
    assert persons[0].tag == "tag"
    assert organizations[0].site == "site"