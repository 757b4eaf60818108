from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from PyQt6.QtCore import QUrl, QUrlQuery
from PyQt6.QtNetwork import QNetworkRequest

if TYPE_CHECKING:
    from readcomic.source import Source

__all__ = ("Request", "Url")


class Url(QUrl):
    """A ``QUrl`` with helpers for query parameters.

    List values become one query item per element, everything else is
    converted with ``str``.
    """

    def __init__(self, url: str | QUrl, *, params: dict | None = None) -> None:
        super().__init__(url)
        if params:
            self.set_params(params)

    @staticmethod
    def _items(params: dict) -> list[tuple[str, str]]:
        items = []
        for name, value in params.items():
            values = value if isinstance(value, (list, tuple)) else (value,)
            items.extend((name, str(val)) for val in values)
        return items

    def add_params(self, params: dict) -> None:
        query = QUrlQuery(self.query())
        for name, value in self._items(params):
            query.addQueryItem(name, value)
        self.setQuery(query)

    def set_params(self, params: dict) -> None:
        query = QUrlQuery()
        query.setQueryItems(self._items(params))
        self.setQuery(query)

    def resolved(self, relative: str | QUrl) -> Url:
        return Url(super().resolved(QUrl(relative)))


class Request(QNetworkRequest):
    DEFAULT_USER_AGENT = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    class Route(IntEnum):
        GET, POST, PUT, DELETE = range(4)

    def __init__(
        self,
        url: str | QUrl,
        *,
        route: Route = Route.GET,
        data: dict | bytes | None = None,
        source: Source | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(Url(url))
        self.route = route
        self.data = data
        self.source = source
        self.setHeader(Request.KnownHeaders.UserAgentHeader, user_agent)

    def __repr__(self) -> str:
        return f"<Request route={self.route.name} url='{self.url().toString()}'>"

    def user_agent(self) -> str:
        return self.header(Request.KnownHeaders.UserAgentHeader)

    def url(self) -> Url:
        return Url(super().url())
