"""Shared response models, JSON time encoding and HTML sanitising."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from html.parser import HTMLParser
from typing import Any, Callable, Iterable, Mapping
from urllib.parse import urlsplit

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_UINT64_MAX = 2**64 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", "'": "&#39;", '"': "&#34;"}
)

_URL_ATTRIBUTES = frozenset({"href", "src", "cite"})

_TIME_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"(?:(Z)|([+-])(\d{2}):(\d{2}))$"
)


def _escape(text: str) -> str:
    return text.translate(_ESCAPES)


@dataclass(frozen=True)
class Policy:
    """An allow-list HTML sanitising policy."""

    allowed_elements: frozenset[str] = frozenset()
    allowed_attributes: Mapping[str, frozenset[str]] = field(default_factory=dict)
    skip_content: frozenset[str] = frozenset({"script", "style"})
    url_schemes: frozenset[str] = frozenset({"http", "https", "mailto"})
    allow_relative_urls: bool = True
    require_nofollow: bool = False

    def sanitize(self, text: str) -> str:
        """Return ``text`` with every element and attribute not allowed removed."""
        if not text:
            return ""
        parser = _Sanitizer(self)
        parser.feed(text)
        parser.close()
        return "".join(parser.parts)

    def _url_allowed(self, value: str) -> bool:
        value = value.strip()
        try:
            scheme = urlsplit(value).scheme
        except ValueError:
            return False
        if not scheme:
            return self.allow_relative_urls
        return scheme.lower() in self.url_schemes

    def _filter_attributes(
        self, tag: str, attrs: Iterable[tuple[str, str | None]]
    ) -> list[tuple[str, str]]:
        allowed = self.allowed_attributes.get(tag, frozenset()) | self.allowed_attributes.get(
            "*", frozenset()
        )
        kept = []
        for name, value in attrs:
            value = value or ""
            if name not in allowed:
                continue
            if name in _URL_ATTRIBUTES and not self._url_allowed(value):
                continue
            kept.append((name, value))
        if self.require_nofollow and tag == "a" and any(name == "href" for name, _ in kept):
            kept = [(name, value) for name, value in kept if name != "rel"]
            kept.append(("rel", "nofollow"))
        return kept


class _Sanitizer(HTMLParser):
    def __init__(self, policy: Policy) -> None:
        super().__init__(convert_charrefs=True)
        self._policy = policy
        self._skipping: list[str] = []
        self.parts: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs, closed=False)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._open(tag, attrs, closed=True)

    def _open(self, tag: str, attrs: list[tuple[str, str | None]], closed: bool) -> None:
        policy = self._policy
        if self._skipping or tag in policy.skip_content:
            if not closed and tag in policy.skip_content:
                self._skipping.append(tag)
            return
        if tag not in policy.allowed_elements:
            return
        rendered = "".join(
            f' {name}="{_escape(value)}"'
            for name, value in policy._filter_attributes(tag, attrs)
        )
        self.parts.append(f"<{tag}{rendered}{'/' if closed else ''}>")

    def handle_endtag(self, tag: str) -> None:
        if self._skipping:
            if tag == self._skipping[-1]:
                self._skipping.pop()
            return
        if tag in self._policy.allowed_elements:
            self.parts.append(f"</{tag}>")

    def handle_data(self, data: str) -> None:
        if not self._skipping:
            self.parts.append(_escape(data))


_UGC_ELEMENTS = frozenset(
    {
        "a", "abbr", "acronym", "address", "area", "article", "aside", "b", "bdi",
        "bdo", "big", "blockquote", "br", "caption", "center", "cite", "code", "col",
        "colgroup", "dd", "del", "details", "dfn", "div", "dl", "dt", "em",
        "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hgroup", "hr", "i", "img", "ins", "kbd", "li", "mark", "ol", "p",
        "pre", "q", "rp", "rt", "ruby", "s", "samp", "section", "small", "span",
        "strike", "strong", "sub", "summary", "sup", "table", "tbody", "td", "tfoot",
        "th", "thead", "time", "tr", "tt", "u", "ul", "var", "wbr",
    }
)

_UGC_ATTRIBUTES = {
    "*": frozenset({"dir", "lang", "title"}),
    "a": frozenset({"href"}),
    "img": frozenset({"src", "alt", "width", "height", "align"}),
    "blockquote": frozenset({"cite"}),
    "q": frozenset({"cite"}),
    "del": frozenset({"cite", "datetime"}),
    "ins": frozenset({"cite", "datetime"}),
    "time": frozenset({"datetime"}),
    "ol": frozenset({"type", "start"}),
    "li": frozenset({"value"}),
    "td": frozenset({"colspan", "rowspan", "abbr", "align"}),
    "th": frozenset({"colspan", "rowspan", "abbr", "align", "scope"}),
    "col": frozenset({"span"}),
    "colgroup": frozenset({"span"}),
    "table": frozenset({"summary"}),
}


def ugc_policy() -> Policy:
    """Return a policy suited to user-generated content."""
    return Policy(
        allowed_elements=_UGC_ELEMENTS,
        allowed_attributes=dict(_UGC_ATTRIBUTES),
        require_nofollow=True,
    )


def format_time(value: datetime) -> str:
    """Format a time as RFC 3339 with trimmed fractional seconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = int(value.utcoffset().total_seconds()) // 60
    if offset == 0:
        return text + "Z"
    sign = "-" if offset < 0 else "+"
    hours, minutes = divmod(abs(offset), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 time; raise ValueError if it is malformed."""
    match = _TIME_PATTERN.match(text)
    if match is None:
        raise ValueError(f"invalid time: {text!r}")
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = (
        match.groups()
    )
    if zulu:
        tz = timezone.utc
    else:
        delta = timedelta(hours=int(off_h), minutes=int(off_m))
        tz = timezone(-delta if sign == "-" else delta)
    micro = int((fraction or "").ljust(6, "0")[:6])
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro,
        tzinfo=tz,
    )


def _plain(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def to_json(value: Any) -> str:
    """Serialise a model, a list of models or plain data to compact JSON."""
    return json.dumps(_plain(value), separators=(",", ":"), ensure_ascii=False)


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{kind}: expected a JSON object, got {type(data).__name__}")
    return data


def _as_uint(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"{key}: expected an unsigned integer, got {value!r}")
    return value


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"{key}: expected an integer, got {value!r}")
    return value


def _as_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a string, got {value!r}")
    return value


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{key}: expected a boolean, got {value!r}")
    return value


def _as_time(value: Any, key: str) -> datetime:
    return parse_time(_as_str(value, key))


_Decoder = Callable[[Any, str], Any]


def _decode_fields(
    data: Any, fields: Mapping[str, tuple[str, _Decoder]], kind: str
) -> dict[str, Any]:
    """Map JSON keys to keyword arguments; nulls and unknown keys are skipped."""
    kwargs = {}
    for key, value in _require_mapping(data, kind).items():
        spec = fields.get(key)
        if value is None or spec is None:
            continue
        attribute, decode = spec
        kwargs[attribute] = decode(value, key)
    return kwargs


def _decode_list(data: Any, decode: Callable[[Any], Any], kind: str) -> list | None:
    if data is None:
        return None
    if not isinstance(data, list):
        raise ValueError(f"{kind}: expected a JSON array, got {type(data).__name__}")
    return [None if item is None else decode(item) for item in data]


@dataclass
class ResponseBool:
    like: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"like": True} if self.like else {}


@dataclass
class ResponseID:
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id} if self.id else {}


@dataclass
class Error:
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message} if self.message else {}


@dataclass
class ChatMessage:
    message: str = ""
    user_one_id: int = 0
    user_one: str = ""
    user_two_id: int = 0
    user_two: str = ""
    created: datetime = ZERO_TIME
    vacancy_id: int = 0

    _FIELDS = {
        "message": ("message", _as_str),
        "userOneId": ("user_one_id", _as_uint),
        "userOne": ("user_one", _as_str),
        "userTwoId": ("user_two_id", _as_uint),
        "userTwo": ("user_two", _as_str),
        "created": ("created", _as_time),
        "vacancyId": ("vacancy_id", _as_uint),
    }

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"message": self.message}
        if self.user_one_id:
            out["userOneId"] = self.user_one_id
        if self.user_one:
            out["userOne"] = self.user_one
        if self.user_two_id:
            out["userTwoId"] = self.user_two_id
        if self.user_two:
            out["userTwo"] = self.user_two
        out["created"] = format_time(self.created)
        if self.vacancy_id:
            out["vacancyId"] = self.vacancy_id
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ChatMessage:
        return cls(**_decode_fields(data, cls._FIELDS, "message"))


def _message_list(value: Any, key: str) -> list[ChatMessage | None] | None:
    return _decode_list(value, ChatMessage.from_dict, key)


@dataclass
class Messages:
    from_: list[ChatMessage | None] | None = None
    to: list[ChatMessage | None] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"from": _plain(self.from_), "to": _plain(self.to)}

    @classmethod
    def from_dict(cls, data: Any) -> Messages:
        fields = {"from": ("from_", _message_list), "to": ("to", _message_list)}
        return cls(**_decode_fields(data, fields, "messages"))


@dataclass
class ChatParameters:
    from_id: int = 0
    to_id: int = 0
    page: int = 0


@dataclass
class SummaryCredentials:
    user_id: int = 0
    organization_id: int = 0
    user_name: str = ""
    organization_name: str = ""


@dataclass
class ConversationTitle:
    chatter_id: int = 0
    avatar: str = ""
    chatter_name: str = ""
    tag: str = ""
    interview_date: datetime = ZERO_TIME

    _FIELDS = {
        "chatter_id": ("chatter_id", _as_uint),
        "avatar": ("avatar", _as_str),
        "chatter_name": ("chatter_name", _as_str),
        "tag": ("tag", _as_str),
        "interview_date": ("interview_date", _as_time),
    }

    def to_dict(self) -> dict[str, Any]:
        return {
            "chatter_id": self.chatter_id,
            "avatar": self.avatar,
            "chatter_name": self.chatter_name,
            "tag": self.tag,
            "interview_date": format_time(self.interview_date),
        }

    @classmethod
    def from_dict(cls, data: Any) -> ConversationTitle:
        return cls(**_decode_fields(data, cls._FIELDS, "conversation"))


def conversations_from_json(text: str) -> list[ConversationTitle | None] | None:
    """Decode a JSON array of conversation titles; ``null`` gives None."""
    return _decode_list(json.loads(text), ConversationTitle.from_dict, "conversations")