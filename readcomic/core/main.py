from __future__ import annotations

import sys
from datetime import datetime
from logging import getLogger

from PyQt6.QtCore import QCommandLineOption, QCommandLineParser, QCoreApplication

from readcomic import __version__
from readcomic.source import Chapter, Comic, ComicList, Source
from readcomic.sources import _default_sources
from readcomic.sources.readcomiconline import DescrambleError

from .network import Network, Request, Response
from .settings import AppSettings
from . import utils

logger = getLogger(__name__)


def _fetch(network: Network, request: Request) -> Response | None:
    response = network.handle_request(request)
    response.wait()
    if response.error() != Response.Error.NoError:
        print(
            f"Request to {response.url().toString()} failed: {response.error_string()}",
            file=sys.stderr,
        )
        return None
    return response


def _page_number(value: str) -> int:
    if not value:
        return 1
    if not value.isdigit() or int(value) < 1:
        raise ValueError(f"Page must be a positive number, not {value!r}")
    return int(value)


def _print_comic_list(comic_list: ComicList) -> None:
    for comic in comic_list.comics:
        print(f"{comic.title}\t{comic.url}")
    if comic_list.has_next_page:
        print("(more results on the next page)")


def _find_source(name: str) -> type[Source] | None:
    for cls in _default_sources():
        if getattr(cls, "name", cls.__name__).lower() == name.lower():
            return cls
    return None


def _print_pages(source: Source, network: Network, url: str) -> int:
    chapter = Chapter(
        number=0, title="", url=source.url_to_slug(url), uploaded=datetime.now()
    )
    if (response := _fetch(network, source.get_chapter_pages(chapter))) is None:
        return 1

    pages = source.parse_chapter_pages(response)
    if not pages:
        print("No pages found", file=sys.stderr)
        return 1

    failed = 0
    for page in pages:
        try:
            request = source.get_page(page)
        except DescrambleError as e:
            logger.error(f"Page {page.number} of {url} failed to load", exc_info=e)
            print(f"{page.number}\tfailed to load: {e}", file=sys.stderr)
            failed += 1
            continue
        print(f"{page.number}\t{request.url().toString()}")

    return 1 if failed else 0


def _run_cli(app: QCoreApplication, argv: list[str]) -> int:
    parser = QCommandLineParser()
    parser.setApplicationDescription("Browse ReadComicOnline from the command line")
    parser.addHelpOption()
    parser.addVersionOption()

    sourceOption = QCommandLineOption(
        ["s", "source"], "Source to use", "name", "ReadComicOnline"
    )
    popularOption = QCommandLineOption(["popular"], "List popular comics", "page")
    latestOption = QCommandLineOption(["latest"], "List latest updates", "page")
    searchOption = QCommandLineOption(["search"], "Search for comics", "query")
    genreOption = QCommandLineOption(["genre"], "Only search in a genre", "genre")
    chaptersOption = QCommandLineOption(["chapters"], "List chapters of a comic", "url")
    pagesOption = QCommandLineOption(["pages"], "List image urls of a chapter", "url")
    qualityOption = QCommandLineOption(["quality"], "Image quality (hq or lq)", "quality")
    verboseOption = QCommandLineOption(["v", "verbose"], "Log to stderr")

    for option in (
        sourceOption,
        popularOption,
        latestOption,
        searchOption,
        genreOption,
        chaptersOption,
        pagesOption,
        qualityOption,
        verboseOption,
    ):
        parser.addOption(option)
    parser.process(argv)

    utils.setup_logging(verbose=parser.isSet(verboseOption))

    if (cls := _find_source(parser.value(sourceOption))) is None:
        print(f"Unknown source {parser.value(sourceOption)}", file=sys.stderr)
        return 2

    settings = AppSettings(app)
    network = Network(app)
    source = cls(network, settings)

    if parser.isSet(qualityOption):
        try:
            source.quality = parser.value(qualityOption)
        except ValueError as e:
            print(e, file=sys.stderr)
            return 2

    try:
        if parser.isSet(genreOption):
            source.include_genres(*parser.values(genreOption))
        popular_page = _page_number(parser.value(popularOption))
        latest_page = _page_number(parser.value(latestOption))
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    if parser.isSet(popularOption):
        if (response := _fetch(network, source.get_popular(popular_page))) is None:
            return 1
        _print_comic_list(source.parse_popular(response))
        return 0

    if parser.isSet(latestOption):
        if (response := _fetch(network, source.get_latest(latest_page))) is None:
            return 1
        _print_comic_list(source.parse_latest(response))
        return 0

    if parser.isSet(searchOption):
        request = source.search_for_comic(parser.value(searchOption))
        if (response := _fetch(network, request)) is None:
            return 1
        _print_comic_list(source.parse_search_results(response))
        return 0

    if parser.isSet(chaptersOption):
        comic = Comic(
            title="", url=source.url_to_slug(parser.value(chaptersOption)), thumbnail=None
        )
        if (response := _fetch(network, source.get_chapters(comic))) is None:
            return 1
        for chapter in source.parse_chapters(response):
            print(f"{chapter.number}\t{chapter.title}\t{chapter.url}")
        return 0

    if parser.isSet(pagesOption):
        return _print_pages(source, network, parser.value(pagesOption))

    parser.showHelp(0)
    return 0


def main(argv: list[str]) -> int:
    app = QCoreApplication(argv)
    QCoreApplication.setApplicationName("readcomic")
    QCoreApplication.setApplicationVersion(__version__)
    return _run_cli(app, argv)


def console_main() -> int:
    return main(sys.argv)
