import pytest
from PyQt6.QtCore import QByteArray, QCoreApplication

from readcomic.core import AppSettings, Request, Response
from readcomic.sources import ReadComicOnline


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication(["readcomic-tests"])
    yield app


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(path=str(tmp_path / "config.ini"))


@pytest.fixture
def source(settings) -> ReadComicOnline:
    return ReadComicOnline(None, settings)


@pytest.fixture
def make_response():
    def make(url: str, body: str) -> Response:
        response = Response(None, Request(url))
        response._data = QByteArray(body.encode())
        response._is_finished = True
        return response

    return make
