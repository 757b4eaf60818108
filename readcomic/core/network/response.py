from __future__ import annotations

from PyQt6.QtCore import pyqtSignal, QByteArray, QEventLoop, QObject
from PyQt6.QtNetwork import QNetworkReply

from .request import Request, Url

__all__ = ("Response",)


class Response(QObject):
    """The result of a :class:`Request` sent through :class:`Network`.

    The body and error are copied out of the reply once it finishes, so the
    reply itself can be deleted straight away.
    """

    finished = pyqtSignal()

    Error = QNetworkReply.NetworkError

    def __init__(self, parent: QObject | None, request: Request) -> None:
        super().__init__(parent)
        self._request = request
        self._reply: QNetworkReply | None = None

        self._data = QByteArray()
        self._error = Response.Error.NoError
        self._error_string = ""
        self._status_code: int | None = None
        self._is_finished = False

    @property
    def request(self) -> Request:
        return self._request

    @property
    def route(self) -> Request.Route:
        return self._request.route

    def _connect_reply(self, reply: QNetworkReply) -> None:
        self._reply = reply
        reply.finished.connect(self._reply_finished)

    def _reply_finished(self) -> None:
        reply, self._reply = self._reply, None
        self._status_code = reply.attribute(Request.Attribute.HttpStatusCodeAttribute)

        if (error := reply.error()) == Response.Error.NoError:
            self._data = reply.readAll()
        else:
            self._error, self._error_string = error, reply.errorString()

        self._is_finished = True
        self.finished.emit()

    def status_code(self) -> int | None:
        return self._status_code

    def url(self) -> Url:
        return self._request.url()

    def error(self) -> QNetworkReply.NetworkError:
        return self._error

    def error_string(self) -> str:
        return self._error_string

    def read_all(self) -> QByteArray:
        return QByteArray(self._data)

    def wait(self) -> None:
        """Blocks until the reply finishes, processing Qt events meanwhile."""
        if self._is_finished:
            return

        loop = QEventLoop(self)
        self.finished.connect(loop.quit)
        loop.exec()
        loop.deleteLater()
