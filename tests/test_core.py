import json
import logging

import pytest

from PyQt6.QtCore import QUrl

from readcomic.core import Network, Request, Response, Url
from readcomic.core.main import _find_source
from readcomic.source import Chapter, Comic, ComicList, ComicStatus, Page
from readcomic.sources import ReadComicOnline


class TestModels:
    def test_page_defaults(self):
        page = Page(number=3)
        assert (page.url, page.token) == ("", "")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"number": "1"},
            {"number": 0, "url": None},
            {"number": 0, "token": 5},
        ],
    )
    def test_page_validation(self, kwargs):
        with pytest.raises(TypeError):
            Page(**kwargs)

    def test_page_number_must_not_be_negative(self):
        with pytest.raises(ValueError):
            Page(number=-1)

    def test_comic_equality_uses_url(self):
        first = Comic(title="Saga", url="/Comic/Saga", thumbnail=None)
        second = Comic(title="Saga (2012)", url="/Comic/Saga", thumbnail=None)
        assert first == second
        assert hash(first) == hash(second)

    def test_comic_status_type(self):
        with pytest.raises(TypeError):
            Comic(title="Saga", url="/Comic/Saga", thumbnail=None, status="Ongoing")
        comic = Comic(title="Saga", url="/Comic/Saga", thumbnail=None)
        assert comic.status == ComicStatus.UNKNOWN
        assert comic.genres == []

    def test_chapter_requires_datetime(self):
        with pytest.raises(TypeError):
            Chapter(number=0, title="Issue #1", url="/Comic/Saga/Issue-1", uploaded="today")

    def test_comic_list_type(self):
        with pytest.raises(TypeError):
            ComicList(comics=["Saga"])


class TestSource:
    def test_id_is_stable(self, settings):
        first, second = ReadComicOnline(None, settings), ReadComicOnline(None)
        assert first.id == second.id
        assert len(str(first.id)) == 12
        assert first.name == "ReadComicOnline"

    def test_url_to_slug(self, source):
        assert source.url_to_slug("https://readcomiconline.li/Comic/Saga") == "/Comic/Saga"
        assert source.url_to_slug("/Comic/Saga/Issue-1?id=1") == "/Comic/Saga/Issue-1?id=1"

    def test_thumbnail_request(self, source):
        comic = Comic(title="Saga", url="/Comic/Saga", thumbnail="https://readcomiconline.li/a.jpg")
        assert source.get_thumbnail(comic).url().toString() == comic.thumbnail

    def test_find_source(self):
        assert _find_source("readcomiconline") is ReadComicOnline
        assert _find_source("mangadex") is None


class TestSettings:
    def test_get_string_default(self, settings):
        assert settings.get_string("missing", "fallback") == "fallback"

    def test_value_changed(self, settings):
        changes = []
        settings.value_changed.connect(lambda key, value: changes.append((key, value)))
        settings.setValue("source_1/qualitypref", "lq")
        assert changes == [("source_1/qualitypref", "lq")]
        assert settings.get_string("source_1/qualitypref", "hq") == "lq"


class TestNetwork:
    def test_url_params(self):
        url = Url("https://readcomiconline.li/Comic/Saga/Issue-1?id=1")
        url.add_params({"quality": "hq"})
        assert url.toString() == "https://readcomiconline.li/Comic/Saga/Issue-1?id=1&quality=hq"

        url.set_params({"page": 2})
        assert url.toString() == "https://readcomiconline.li/Comic/Saga/Issue-1?page=2"

    def test_request_defaults(self):
        request = Request("https://readcomiconline.li")
        assert request.route == Request.Route.GET
        assert request.user_agent() == Request.DEFAULT_USER_AGENT
        assert repr(request) == "<Request route=GET url='https://readcomiconline.li'>"

    def test_body_encoding(self):
        assert Network._encode_body(b"comicName=saga") == b"comicName=saga"
        assert json.loads(Network._encode_body({"page": 1})) == {"page": 1}


class TestNetworkReplies:
    @pytest.fixture
    def network(self):
        network = Network()
        yield network
        network.deleteLater()

    def test_get_reads_body(self, network, tmp_path):
        path = tmp_path / "issue-1.html"
        path.write_bytes(b"<script>lstImages.push('abc');</script>")

        response = network.handle_request(Request(QUrl.fromLocalFile(str(path))))
        response.wait()

        assert response.error() == Response.Error.NoError
        assert response.error_string() == ""
        assert response.read_all().data() == b"<script>lstImages.push('abc');</script>"

    def test_wait_after_finish_returns_at_once(self, network, tmp_path):
        path = tmp_path / "cover.jpg"
        path.write_bytes(b"\xff\xd8\xff")

        response = network.handle_request(Request(QUrl.fromLocalFile(str(path))))
        response.wait()
        response.wait()
        assert response.read_all().data() == b"\xff\xd8\xff"

    def test_missing_file_is_reported(self, network, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger="readcomic.core.network")
        url = QUrl.fromLocalFile(str(tmp_path / "missing.html"))

        response = network.handle_request(Request(url))
        response.wait()

        assert response.error() != Response.Error.NoError
        assert response.error_string()
        assert response.read_all().isEmpty()
        assert f"GET {url.toString()} failed" in caplog.text

    def test_put_sends_bytes_body(self, network, tmp_path):
        path = tmp_path / "upload.txt"
        request = Request(
            QUrl.fromLocalFile(str(path)), route=Request.Route.PUT, data=b"comicName=saga"
        )

        response = network.handle_request(request)
        response.wait()

        assert response.error() == Response.Error.NoError
        assert path.read_bytes() == b"comicName=saga"

    def test_put_sends_json_body(self, network, tmp_path):
        path = tmp_path / "upload.json"
        request = Request(
            QUrl.fromLocalFile(str(path)), route=Request.Route.PUT, data={"page": 2}
        )

        network.handle_request(request).wait()
        assert json.loads(path.read_bytes()) == {"page": 2}
