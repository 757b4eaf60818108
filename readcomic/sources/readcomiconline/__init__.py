from __future__ import annotations

from datetime import datetime
from logging import getLogger

from bs4 import BeautifulSoup, Tag
from dateparser import parse

from readcomic.core.network import Request, Response, Url
from readcomic.source import *

from .filters import GENRES, default_filters, encode_form, form_fields, validate_value
from .scramble import *

logger = getLogger(__name__)


class ReadComicOnline(Source):
    BASE_URL = "https://readcomiconline.li"
    name = "ReadComicOnline"
    supports_latest = True
    supports_popular = True
    supports_search = True
    has_filters = True

    USER_AGENT = "Mozilla/5.0 (Windows NT 6.3; WOW64)"
    QUALITY_PREF = "qualitypref"
    QUALITIES = ("hq", "lq")

    comic_selector = ".list-comic > .item > a:first-child"
    popular_next_page_selector = 'li > a:-soup-contains("Next")'
    latest_next_page_selector = 'ul.pager > li > a:-soup-contains("Next")'
    chapter_selector = "table.listing tr"
    image_script_selector = 'script:-soup-contains("lstImages.push")'

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.filters = default_filters()

    @property
    def quality(self) -> str:
        quality = self.preference(ReadComicOnline.QUALITY_PREF, "hq")
        return quality if quality in ReadComicOnline.QUALITIES else "hq"

    @quality.setter
    def quality(self, quality: str) -> None:
        if quality not in ReadComicOnline.QUALITIES:
            raise ValueError(f"Quality must be one of {ReadComicOnline.QUALITIES}")
        self.set_preference(ReadComicOnline.QUALITY_PREF, quality)

    def _build_request(
        self,
        url: str | Url,
        route: Request.Route = Request.Route.GET,
        data: bytes | None = None,
    ) -> Request:
        request = Request(
            url, route=route, data=data, source=self, user_agent=self.USER_AGENT
        )
        return request

    def absolute_url(self, url: str) -> str:
        return Url(self.BASE_URL).resolved(url).toString()

    def comic_from_element(self, element: Tag) -> Comic:
        img = element.select_one("img")
        thumbnail = self.absolute_url(img.attrs["src"]) if img is not None else None
        return Comic(
            title=element.get_text(strip=True),
            url=self.url_to_slug(element.attrs["href"]),
            thumbnail=thumbnail,
        )

    def _parse_comic_list(self, response: Response, next_page_selector: str | None) -> ComicList:
        html = BeautifulSoup(response.read_all().data(), features="html.parser")
        comics = list(map(self.comic_from_element, html.select(self.comic_selector)))
        has_next_page = (
            next_page_selector is not None
            and html.select_one(next_page_selector) is not None
        )
        return ComicList(comics=comics, has_next_page=has_next_page)

    def get_popular(self, page: int) -> Request:
        url = Url(f"{self.BASE_URL}/ComicList/MostPopular", params={"page": page})
        return self._build_request(url)

    def parse_popular(self, response: Response) -> ComicList:
        return self._parse_comic_list(response, self.popular_next_page_selector)

    def get_latest(self, page: int) -> Request:
        url = Url(f"{self.BASE_URL}/ComicList/LatestUpdate", params={"page": page})
        return self._build_request(url)

    def parse_latest(self, response: Response) -> ComicList:
        return self._parse_comic_list(response, self.latest_next_page_selector)

    def search_for_comic(self, query: str) -> Request:
        fields = [("comicName", query), *form_fields(self.filters)]
        request = self._build_request(
            f"{self.BASE_URL}/AdvanceSearch",
            route=Request.Route.POST,
            data=encode_form(fields),
        )
        request.setHeader(
            Request.KnownHeaders.ContentTypeHeader,
            "application/x-www-form-urlencoded",
        )
        return request

    def parse_search_results(self, response: Response) -> ComicList:
        return self._parse_comic_list(response, None)

    def get_comic_info(self, comic: Comic) -> Request:
        return self._build_request(self.BASE_URL + comic.url)

    @staticmethod
    def _parse_status(status: str) -> ComicStatus:
        if "Ongoing" in status:
            return ComicStatus.ONGOING
        if "Completed" in status:
            return ComicStatus.COMPLETED
        return ComicStatus.UNKNOWN

    def parse_comic_info(self, response: Response) -> Comic:
        html = BeautifulSoup(response.read_all().data(), features="html.parser")
        info = html.select_one("div.barContent")

        # fmt: off
        title = getattr(info.select_one("a.bigChar"), "text", "").strip()
        artist = getattr(info.select_one('p:has(span:-soup-contains("Artist:")) > a'), "text", None)
        author = getattr(info.select_one('p:has(span:-soup-contains("Writer:")) > a'), "text", None)
        genres = [a.get_text(strip=True) for a in info.select('p:has(span:-soup-contains("Genres:")) > a')]
        description = " ".join(p.get_text(" ", strip=True) for p in info.select('p:has(span:-soup-contains("Summary:")) ~ p'))
        status = info.select_one('p:has(span:-soup-contains("Status:"))')
        # fmt: on

        img = html.select_one(".rightBox img")
        thumbnail = self.absolute_url(img.attrs["src"]) if img is not None else None

        return Comic(
            title=title,
            url=self.url_to_slug(response.url().toString()),
            description=description or None,
            author=author,
            artist=artist,
            genres=genres,
            status=self._parse_status(status.get_text() if status is not None else ""),
            thumbnail=thumbnail,
        )

    def get_chapters(self, comic: Comic) -> Request:
        return self._build_request(self.BASE_URL + comic.url)

    def chapter_from_element(self, element: Tag, number: int) -> Chapter:
        a = element.select_one("a")
        title, url = a.get_text(strip=True), self.url_to_slug(a.attrs["href"])

        cells = element.select("td")
        uploaded = None
        if len(cells) > 1:
            uploaded = parse(
                cells[1].get_text(strip=True),
                date_formats=["%m/%d/%Y"],
                languages=["en"],
            )

        return Chapter(
            number=number, title=title, url=url, uploaded=uploaded or datetime.now()
        )

    def parse_chapters(self, response: Response) -> list[Chapter]:
        html = BeautifulSoup(response.read_all().data(), features="html.parser")
        # the first two rows are the table header and a spacer
        rows = [row for row in html.select(self.chapter_selector)[2:] if row.select_one("a")]
        return [
            self.chapter_from_element(row, number)
            for number, row in enumerate(rows[::-1])
        ]

    def get_chapter_pages(self, chapter: Chapter) -> Request:
        url = Url(self.BASE_URL + chapter.url)
        url.add_params({"quality": self.quality})
        return self._build_request(url)

    def parse_chapter_pages(self, response: Response) -> list[Page]:
        html = BeautifulSoup(response.read_all().data(), features="html.parser")
        script = html.select_one(self.image_script_selector)
        if script is None:
            logger.warning(f"No image script found in {response.url().toString()}")
            return []

        pages = build_pages(extract_tokens(script.string or ""))
        if not pages:
            logger.warning(f"No image tokens found in {response.url().toString()}")
        return pages

    def get_page(self, page: Page) -> Request:
        try:
            url = resolve_image_url(page.token)
        except DescrambleError:
            logger.error(f"Failed to resolve page {page.number}")
            raise
        return self._build_request(url)

    def update_filters(self, filters: dict[str, int | str | bool | list]) -> bool:
        changed = False
        for key, value in filters.items():
            if (option := self.filters.get(key)) is None:
                raise KeyError(f"Unknown filter {key!r}")
            if not validate_value(option, value):
                raise ValueError(f"Invalid value {value!r} for filter {key!r}")
            if option["value"] != value:
                option["value"] = value
                changed = True
        return changed

    def include_genres(self, *genres: str) -> bool:
        states = list(self.filters["genres"]["value"])
        for genre in genres:
            if genre not in GENRES:
                raise ValueError(f"Unknown genre {genre!r}")
            states[GENRES.index(genre)] = 1
        return self.update_filters({"genres": states})
