from __future__ import annotations

import pytest

from sitelib.metadata import DEFAULT_METADATA, Author, metadata_from_mapping


def test_default_record_to_dict():
    data = DEFAULT_METADATA.to_dict()
    assert data["title"] == "Other Dev®"
    assert data["url"] == "https://otherdev.com"
    assert data["language"] == "en"
    assert data["businessType"] == "LocalBusiness"
    assert data["contactEmail"] == "hello@otherdev.com"
    assert data["contactPhone"] == "+92315 6893331"
    assert data["twitter"] == "@otherdevistaken"
    assert data["languages"] == ["en", "de", "ur"]
    assert data["serviceAreas"] == ["US", "Canada", "UK", "Australia", "Pakistan", "Germany"]
    assert data["gmbLink"] == "https://g.page/17231828160667184010"
    assert data["logo"] == "/images/icons/other-dev-logo.png"
    assert data["author"] == {
        "name": "Other Dev®",
        "email": "hello@otherdev.com",
        "url": "https://otherdev.com/",
    }


def test_to_dict_key_set():
    assert set(DEFAULT_METADATA.to_dict()) == {
        "title",
        "url",
        "language",
        "description",
        "keywords",
        "logo",
        "businessType",
        "contactEmail",
        "contactPhone",
        "twitter",
        "languages",
        "serviceAreas",
        "gmbLink",
        "author",
    }


def test_overlay_accepts_snake_and_camel_case():
    md = metadata_from_mapping({"service_areas": ["US"], "gmbLink": "https://example.com/gmb"})
    assert md.service_areas == ("US",)
    assert md.gmb_link == "https://example.com/gmb"
    assert md.title == DEFAULT_METADATA.title


def test_overlay_does_not_mutate_base():
    metadata_from_mapping({"title": "Other"})
    assert DEFAULT_METADATA.title == "Other Dev®"


def test_overlay_on_custom_base():
    base = metadata_from_mapping({"author": {"name": "A", "email": "a@x", "url": "u"}})
    md = metadata_from_mapping({"author": {"url": "v"}}, base=base)
    assert md.author == Author(name="A", email="a@x", url="v")


def test_no_format_validation():
    md = metadata_from_mapping({"contactPhone": "call us", "contactEmail": "not-an-email"})
    assert md.contact_phone == "call us"
    assert md.contact_email == "not-an-email"


@pytest.mark.parametrize(
    "raw, message",
    [
        ({"nope": "x"}, "unknown metadata field"),
        ({"title": 3}, "must be a string"),
        ({"languages": "en"}, "list of strings"),
        ({"languages": ["en", 1]}, "must be a string"),
        ({"author": "me"}, "author must be a mapping"),
        ({"author": {"handle": "x"}}, "unknown author field"),
    ],
)
def test_overlay_rejects_bad_input(raw, message):
    with pytest.raises(ValueError, match=message):
        metadata_from_mapping(raw)
