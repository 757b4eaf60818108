from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import StrEnum
from hashlib import md5
from typing import NotRequired, TypedDict, TYPE_CHECKING

from readcomic.core.network import Request, Response, Url
from .models import *

if TYPE_CHECKING:
    from readcomic.core.network import Network
    from readcomic.core.settings import AppSettings


__all__ = ("FilterOption", "FilterType", "Source")


class FilterType(StrEnum):
    CHECKBOX = "CHECKBOX"
    LIST = "LIST"
    SELECT = "SELECT"
    TRISTATE = "TRISTATE"


class FilterOption(TypedDict):
    display_name: NotRequired[str]
    value: bool | str | list
    options: NotRequired[list[str]]
    type: FilterType


class Source(ABC):
    """A site that comics can be browsed and read from.

    Every operation is split into a request builder (``get_*``) and a parser
    (``parse_*``) so that the caller decides how requests are sent.
    Preferences are kept in the settings store under ``source_<id>/``.
    """

    BASE_URL: str
    name: str

    has_filters: bool = False
    filters: dict[str, FilterOption] = {}
    supports_latest: bool = True
    supports_popular: bool = False
    supports_search: bool = True

    def __init__(
        self, network: Network | None, settings: AppSettings | None = None
    ) -> None:
        self._network = network
        self._settings = settings

        name = getattr(type(self), "name", None)
        if not isinstance(name, str):
            name = type(self).__name__
        self.name = name
        self.id = int(str(int(md5(name.lower().encode()).hexdigest(), 16))[:12])

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def settings(self) -> AppSettings | None:
        return self._settings

    def _preference_key(self, key: str) -> str:
        return f"source_{self.id}/{key}"

    def preference(self, key: str, default: str) -> str:
        if self._settings is None:
            return default
        return self._settings.get_string(self._preference_key(key), default)

    def set_preference(self, key: str, value: str) -> None:
        if self._settings is None:
            raise RuntimeError(f"{self.name} has no settings store")
        self._settings.setValue(self._preference_key(key), value)

    def url_to_slug(self, url: str) -> str:
        """Strips ``BASE_URL`` from ``url``, which may be absolute or relative."""
        return Url(self.BASE_URL).resolved(url).toString().removeprefix(self.BASE_URL)

    def get_popular(self, page: int) -> Request:
        raise NotImplementedError(f"{self.name} has no popular listing")

    def parse_popular(self, response: Response) -> ComicList:
        raise NotImplementedError(f"{self.name} has no popular listing")

    @abstractmethod
    def get_latest(self, page: int) -> Request: ...

    @abstractmethod
    def parse_latest(self, response: Response) -> ComicList: ...

    @abstractmethod
    def search_for_comic(self, query: str) -> Request: ...

    @abstractmethod
    def parse_search_results(self, response: Response) -> ComicList: ...

    @abstractmethod
    def get_comic_info(self, comic: Comic) -> Request: ...

    @abstractmethod
    def parse_comic_info(self, response: Response) -> Comic: ...

    @abstractmethod
    def get_chapters(self, comic: Comic) -> Request: ...

    @abstractmethod
    def parse_chapters(self, response: Response) -> Sequence[Chapter]: ...

    @abstractmethod
    def get_chapter_pages(self, chapter: Chapter) -> Request: ...

    @abstractmethod
    def parse_chapter_pages(self, response: Response) -> Sequence[Page]: ...

    def get_thumbnail(self, comic: Comic) -> Request:
        return Request(comic.thumbnail, source=self)

    def parse_thumbnail(self, response: Response) -> bytes:
        return response.read_all().data()

    def get_page(self, page: Page) -> Request:
        return Request(page.url, source=self)

    def parse_page(self, response: Response) -> bytes:
        return response.read_all().data()

    def update_filters(self, filters: dict[str, bool | str | list]) -> bool:
        """Stores new filter values and returns whether any of them changed."""
        return False
