"""Person, organization and account models with their JSON encoding."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from jobboard.models.common import (
    ZERO_TIME,
    Policy,
    _as_bool,
    _as_time,
    _as_uint,
    _decode_list,
)
from jobboard.models.vacancy import _field, _Model

_ACCOUNT_SPEC = (
    _field("id", converter=_as_uint),
    _field("login"),
    _field("password"),
    _field("tag"),
    _field("email"),
    _field("phone"),
    _field("registered", converter=_as_time, always=True),
    _field("avatar"),
)


@dataclass
class Person(_Model):
    id: int = 0
    login: str = ""
    password: str = ""
    tag: str = ""
    email: str = ""
    phone: str = ""
    registered: datetime = ZERO_TIME
    avatar: str = ""
    first_name: str = ""
    last_name: str = ""
    gender: str = ""
    birthday: datetime = ZERO_TIME

    _KIND = "person"
    _SPEC = _ACCOUNT_SPEC + (
        _field("firstName", "first_name"),
        _field("lastName", "last_name"),
        _field("gender"),
        _field("birthday", converter=_as_time, always=True),
    )
    _SANITIZED = ("login", "tag", "email", "phone", "first_name", "last_name", "gender")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the person's text fields in place."""
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Person:
        return cls._decode(data)


@dataclass
class Organization(_Model):
    id: int = 0
    login: str = ""
    password: str = ""
    tag: str = ""
    email: str = ""
    phone: str = ""
    registered: datetime = ZERO_TIME
    avatar: str = ""
    name: str = ""
    about: str = ""
    site: str = ""

    _KIND = "organization"
    _SPEC = _ACCOUNT_SPEC + (_field("name"), _field("about"), _field("site"))
    _SANITIZED = ("login", "tag", "email", "phone", "name", "about", "site")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the organization's text fields in place."""
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Organization:
        return cls._decode(data)


@dataclass
class UserLogin(_Model):
    login: str = ""
    password: str = ""

    _KIND = "login"
    _SPEC = (_field("login"), _field("password"))

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> UserLogin:
        return cls._decode(data)


@dataclass
class Favorite(_Model):
    """A favourited account; only id, tag and kind travel over JSON."""

    id: int = 0
    tag: str = ""
    avatar: str = ""
    is_person: bool = False
    name: str = ""
    surname: str = ""

    _KIND = "favorite"
    _SPEC = (
        _field("id", converter=_as_uint),
        _field("tag"),
        _field("isPerson", "is_person", _as_bool),
    )

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Favorite:
        return cls._decode(data)


@dataclass
class ResponseRole(_Model):
    id: int = 0
    role: str = ""

    _KIND = "role"
    _SPEC = (_field("id", converter=_as_uint), _field("role"))

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> ResponseRole:
        return cls._decode(data)


@dataclass
class Role:
    person: bool = False
    organization: bool = False


def sanitize_persons(persons: Iterable[Person], policy: Policy) -> None:
    """Sanitise every person in place."""
    for person in persons:
        person.sanitize(policy)


def sanitize_organizations(organizations: Iterable[Organization], policy: Policy) -> None:
    """Sanitise every organization in place."""
    for organization in organizations:
        organization.sanitize(policy)


def persons_from_json(text: str) -> list[Person | None] | None:
    """Decode a JSON array of persons; ``null`` gives None."""
    return _decode_list(json.loads(text), Person.from_dict, "persons")


def organizations_from_json(text: str) -> list[Organization | None] | None:
    """Decode a JSON array of organizations; ``null`` gives None."""
    return _decode_list(json.loads(text), Organization.from_dict, "organizations")