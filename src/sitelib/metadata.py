"""Site identity record consumed by page templates.

Pure data. Field formats (phone, email, URLs) are not checked.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class Author:
    name: str
    email: str
    url: str


@dataclass(frozen=True)
class SiteMetadata:
    title: str
    url: str
    language: str
    description: str
    keywords: str
    logo: str
    business_type: str
    contact_email: str
    contact_phone: str
    twitter: str
    languages: Tuple[str, ...]
    service_areas: Tuple[str, ...]
    gmb_link: str
    author: Author

    def to_dict(self) -> Dict[str, Any]:
        """Return the record keyed the way templates expect (camelCase)."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Author):
                value = {"name": value.name, "email": value.email, "url": value.url}
            elif isinstance(value, tuple):
                value = list(value)
            out[_to_camel(f.name)] = value
        return out


DEFAULT_METADATA = SiteMetadata(
    title="Other Dev®",
    url="https://otherdev.com",
    language="en",
    description=(
        "Creative software agency focused on accessible, engaging digital experiences. "
        "Web development, creative agency, digital experiences, graphic design, "
        "software development, technology solutions, search engine optimization."
    ),
    keywords=(
        "web development, creative agency, digital experiences, graphic design, "
        "software development, technology solutions, search engine optimization, seo"
    ),
    logo="/images/icons/other-dev-logo.png",
    business_type="LocalBusiness",
    contact_email="hello@otherdev.com",
    contact_phone="+92315 6893331",
    twitter="@otherdevistaken",
    languages=("en", "de", "ur"),
    service_areas=("US", "Canada", "UK", "Australia", "Pakistan", "Germany"),
    gmb_link="https://g.page/17231828160667184010",
    author=Author(
        name="Other Dev®",
        email="hello@otherdev.com",
        url="https://otherdev.com/",
    ),
)

_LIST_FIELDS = {"languages", "service_areas"}


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)


def _to_snake(name: str) -> str:
    return "".join("_" + c.lower() if c.isupper() else c for c in name)


def _as_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def metadata_from_mapping(raw: Mapping[str, Any], base: SiteMetadata = DEFAULT_METADATA) -> SiteMetadata:
    """Overlay ``raw`` onto ``base``.

    Keys may be given in camelCase (as templates see them) or snake_case.
    Unknown keys raise ValueError so typos do not silently vanish.
    """
    known = {f.name for f in fields(SiteMetadata)}
    changes: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _to_snake(str(key))
        if name not in known:
            raise ValueError(f"unknown metadata field: {key}")
        if name == "author":
            if not isinstance(value, Mapping):
                raise ValueError("author must be a mapping")
            author_changes = {}
            for ak, av in value.items():
                if ak not in ("name", "email", "url"):
                    raise ValueError(f"unknown author field: {ak}")
                author_changes[ak] = _as_str(f"author.{ak}", av)
            changes[name] = replace(base.author, **author_changes)
        elif name in _LIST_FIELDS:
            if not isinstance(value, list):
                raise ValueError(f"{key} must be a list of strings")
            changes[name] = tuple(_as_str(key, v) for v in value)
        else:
            changes[name] = _as_str(key, value)
    return replace(base, **changes)
