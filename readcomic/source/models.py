from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


__all__ = ("Comic", "ComicList", "ComicStatus", "Chapter", "Page")


def _check(name: str, value: object, *types: type) -> None:
    if not isinstance(value, types):
        expected = " or ".join("None" if t is type(None) else t.__name__ for t in types)
        raise TypeError(f"{name} must be of type {expected}, not {type(value).__name__}")


class ComicStatus(IntEnum):
    UNKNOWN, ONGOING, COMPLETED = range(3)


@dataclass(slots=True, kw_only=True, eq=False)
class Base:
    """Something a source links to. Two items are the same item when their
    slugs match, whatever their titles say."""

    title: str
    url: str

    def __post_init__(self) -> None:
        _check("title", self.title, str)
        _check("url", self.url, str)

    def __eq__(self, value: object) -> bool:
        return isinstance(value, Base) and self.url == value.url

    def __hash__(self) -> int:
        return hash(self.url)


@dataclass(kw_only=True, slots=True, eq=False)
class Comic(Base):
    thumbnail: str | None
    description: str | None = None
    author: str | None = None
    artist: str | None = None
    genres: list[str] = field(default_factory=list)
    status: ComicStatus = ComicStatus.UNKNOWN

    def __post_init__(self) -> None:
        Base.__post_init__(self)
        for name in ("thumbnail", "description", "author", "artist"):
            _check(name, getattr(self, name), str, type(None))
        _check("genres", self.genres, list)
        _check("status", self.status, ComicStatus)


@dataclass(kw_only=True, slots=True, eq=False)
class Chapter(Base):
    number: int
    uploaded: datetime

    def __post_init__(self) -> None:
        Base.__post_init__(self)
        _check("number", self.number, int)
        _check("uploaded", self.uploaded, datetime)


@dataclass(kw_only=True, slots=True)
class Page:
    """One image of a chapter, in reading order.

    ``url`` is the eager image url. Sources that can only resolve the image
    when it is requested leave it empty and keep what they need in ``token``.
    """

    number: int
    url: str = ""
    token: str = ""

    def __post_init__(self) -> None:
        _check("number", self.number, int)
        if self.number < 0:
            raise ValueError(f"number must be non-negative, not {self.number}")
        _check("url", self.url, str)
        _check("token", self.token, str)


@dataclass(kw_only=True, slots=True)
class ComicList:
    comics: Sequence[Comic]
    has_next_page: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.comics, Sequence) or not all(
            isinstance(comic, Comic) for comic in self.comics
        ):
            raise TypeError("comics must be a sequence of Comic")
        _check("has_next_page", self.has_next_page, bool)
