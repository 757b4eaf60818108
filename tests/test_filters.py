import pytest

from readcomic.source import FilterType
from readcomic.sources.readcomiconline.filters import (
    GENRES,
    default_filters,
    encode_form,
    form_fields,
    validate_value,
)


def test_every_filter_type_becomes_form_fields():
    filters = {
        "nsfw": {"value": True, "type": FilterType.CHECKBOX},
        "rating": {
            "value": ["safe", "suggestive"],
            "options": ["safe", "suggestive", "erotica"],
            "type": FilterType.LIST,
        },
        "status": {"value": "Ongoing", "options": ["", "Ongoing"], "type": FilterType.SELECT},
        "genres": {"value": [0, 2], "options": ["A", "B"], "type": FilterType.TRISTATE},
    }
    assert form_fields(filters) == [
        ("nsfw", "1"),
        ("rating", "safe"),
        ("rating", "suggestive"),
        ("status", "Ongoing"),
        ("genres", "0"),
        ("genres", "2"),
    ]


def test_unknown_filter_type():
    with pytest.raises(ValueError):
        form_fields({"x": {"value": 1, "type": "SLIDER"}})
    with pytest.raises(ValueError):
        validate_value({"value": 1, "type": "SLIDER"}, 1)


def test_default_filters_are_copies():
    first = default_filters()
    first["genres"]["value"][0] = 1
    assert default_filters()["genres"]["value"][0] == 0
    assert len(default_filters()["genres"]["options"]) == len(GENRES) == 48


@pytest.mark.parametrize(
    "option, value, valid",
    [
        ({"value": False, "type": FilterType.CHECKBOX}, True, True),
        ({"value": False, "type": FilterType.CHECKBOX}, 1, False),
        ({"value": [], "options": ["a", "b"], "type": FilterType.LIST}, ["b"], True),
        ({"value": [], "options": ["a", "b"], "type": FilterType.LIST}, ["c"], False),
        ({"value": "", "options": ["", "x"], "type": FilterType.SELECT}, "x", True),
        ({"value": "", "options": ["", "x"], "type": FilterType.SELECT}, "y", False),
        ({"value": [0], "options": ["a"], "type": FilterType.TRISTATE}, [2], True),
        ({"value": [0], "options": ["a"], "type": FilterType.TRISTATE}, [0, 0], False),
    ],
)
def test_validate_value(option, value, valid):
    assert validate_value(option, value) is valid


def test_encode_form():
    body = encode_form([("comicName", "batman & robin"), ("status", ""), ("genres", "1")])
    assert body == b"comicName=batman%20%26%20robin&status=&genres=1"
