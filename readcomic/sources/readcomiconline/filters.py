from __future__ import annotations

from copy import deepcopy

from PyQt6.QtCore import QUrl

from readcomic.source import FilterOption, FilterType

__all__ = ("GENRES", "STATUSES", "default_filters", "form_fields", "encode_form", "validate_value")


STATUSES = ["", "Completed", "Ongoing"]

# Genre names in the order of the site's AdvanceSearch form
GENRES = [
    "Action",
    "Adventure",
    "Anthology",
    "Anthropomorphic",
    "Biography",
    "Children",
    "Comedy",
    "Crime",
    "Drama",
    "Family",
    "Fantasy",
    "Fighting",
    "Graphic Novels",
    "Historical",
    "Horror",
    "Leading Ladies",
    "LGBTQ",
    "Literature",
    "Manga",
    "Martial Arts",
    "Mature",
    "Military",
    "Movies & TV",
    "Music",
    "Mystery",
    "Mythology",
    "Personal",
    "Political",
    "Post-Apocalyptic",
    "Psychological",
    "Pulp",
    "Religious",
    "Robots",
    "Romance",
    "School Life",
    "Sci-Fi",
    "Slice of Life",
    "Sport",
    "Spy",
    "Superhero",
    "Supernatural",
    "Suspense",
    "Thriller",
    "Vampires",
    "Video Games",
    "War",
    "Western",
    "Zombies",
]

_DEFAULT_FILTERS: dict[str, FilterOption] = {
    "status": {
        "display_name": "Status",
        "value": "",
        "options": STATUSES,
        "type": FilterType.SELECT,
    },
    "genres": {
        "display_name": "Genres",
        "value": [0] * len(GENRES),
        "options": GENRES,
        "type": FilterType.TRISTATE,
    },
}


def default_filters() -> dict[str, FilterOption]:
    return deepcopy(_DEFAULT_FILTERS)


def validate_value(option: FilterOption, value: object) -> bool:
    options = option.get("options", [])
    match option["type"]:
        case FilterType.CHECKBOX:
            return isinstance(value, bool)
        case FilterType.LIST:
            return isinstance(value, list) and all(val in options for val in value)
        case FilterType.SELECT:
            return isinstance(value, str) and value in options
        case FilterType.TRISTATE:
            return (
                isinstance(value, list)
                and len(value) == len(options)
                and all(state in (0, 1, 2) for state in value)
            )
        case _:
            raise ValueError(f"Unknown filter type {option['type']!r}")


def form_fields(filters: dict[str, FilterOption]) -> list[tuple[str, str]]:
    """Flattens filter values into form fields, keeping the filter order."""
    fields: list[tuple[str, str]] = []
    for key, option in filters.items():
        value = option["value"]
        match option["type"]:
            case FilterType.CHECKBOX:
                fields.append((key, str(int(value))))
            case FilterType.LIST:
                fields.extend((key, str(val)) for val in value)
            case FilterType.SELECT:
                fields.append((key, str(value)))
            case FilterType.TRISTATE:
                fields.extend((key, str(state)) for state in value)
            case _:
                raise ValueError(f"Unknown filter type {option['type']!r}")
    return fields


def encode_form(fields: list[tuple[str, str]]) -> bytes:
    """Encodes fields as an ``application/x-www-form-urlencoded`` body.

    Empty values are kept as ``name=`` since the site expects every field.
    """
    return b"&".join(
        QUrl.toPercentEncoding(name).data() + b"=" + QUrl.toPercentEncoding(value).data()
        for name, value in fields
    )
