"""Vacancy models, their JSON encoding and the table-driven model base."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterable

from jobboard.models.common import (
    Policy,
    _as_bool,
    _as_int,
    _as_str,
    _as_uint,
    _decode_fields,
    _decode_list,
    _plain,
)

_Converter = Callable[[Any, str], Any]
_Field = tuple[str, str, _Converter, bool]


def _field(
    key: str,
    attr: str | None = None,
    converter: _Converter = _as_str,
    always: bool = False,
) -> _Field:
    """Describe one JSON field: key, attribute, decoder and whether empty values are kept."""
    return key, attr or key, converter, always


class _Model:
    """Mixin giving dataclasses JSON encoding, decoding and sanitising from tables."""

    _SPEC: ClassVar[tuple[_Field, ...]] = ()
    _SANITIZED: ClassVar[tuple[str, ...]] = ()
    _KIND: ClassVar[str] = "object"

    def _sanitize_fields(self, policy: Policy) -> None:
        for name in self._SANITIZED:
            setattr(self, name, policy.sanitize(getattr(self, name)))

    def _encode(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, attr, _, always in self._SPEC:
            value = getattr(self, attr)
            if always or value:
                out[key] = _plain(value)
        return out

    @classmethod
    def _decode(cls, data: Any) -> Any:
        fields = {key: (attr, converter) for key, attr, converter, _ in cls._SPEC}
        return cls(**_decode_fields(data, fields, cls._KIND))

    def sanitize(self, policy: Policy) -> None:
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Any:
        return cls._decode(data)


@dataclass
class VacancyOrganization(_Model):
    id: int = 0
    tag: str = ""
    email: str = ""
    phone: str = ""
    avatar: str = ""
    name: str = ""
    site: str = ""

    _KIND = "organization"
    _SPEC = (
        _field("id", converter=_as_uint),
        _field("tag"),
        _field("email"),
        _field("phone"),
        _field("avatar"),
        _field("name"),
        _field("site"),
    )
    _SANITIZED = ("tag", "email", "phone", "name", "site")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the organization's text fields in place."""
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> VacancyOrganization:
        return cls._decode(data)


def _as_organization(value: Any, key: str) -> VacancyOrganization:
    return VacancyOrganization.from_dict(value)


@dataclass
class Vacancy(_Model):
    id: int = 0
    organization: VacancyOrganization = field(default_factory=VacancyOrganization)
    name: str = ""
    description: str = ""
    salary_from: int = 0
    salary_to: int = 0
    with_tax: bool = False
    responsibilities: str = ""
    conditions: str = ""
    keywords: str = ""

    _KIND = "vacancy"
    _SPEC = (
        _field("id", converter=_as_uint),
        _field("organization", converter=_as_organization, always=True),
        _field("name"),
        _field("description"),
        _field("salaryFrom", "salary_from", _as_int),
        _field("salaryTo", "salary_to", _as_int),
        _field("withTax", "with_tax", _as_bool),
        _field("responsibilities"),
        _field("conditions"),
        _field("keywords"),
    )
    _SANITIZED = ("name", "description", "responsibilities", "conditions", "keywords")

    def sanitize(self, policy: Policy) -> None:
        """Sanitise the vacancy and its organization in place."""
        self.organization.sanitize(policy)
        self._sanitize_fields(policy)

    def to_dict(self) -> dict[str, Any]:
        return self._encode()

    @classmethod
    def from_dict(cls, data: Any) -> Vacancy:
        return cls._decode(data)


def sanitize_vacancies(vacancies: Iterable[Vacancy], policy: Policy) -> None:
    """Sanitise every vacancy in place."""
    for vacancy in vacancies:
        vacancy.sanitize(policy)


def vacancies_from_json(text: str) -> list[Vacancy | None] | None:
    """Decode a JSON array of vacancies; ``null`` gives None."""
    return _decode_list(json.loads(text), Vacancy.from_dict, "vacancies")