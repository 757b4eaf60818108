from __future__ import annotations

from logging import getLogger

from PyQt6.QtCore import QJsonDocument, QObject
from PyQt6.QtNetwork import QNetworkAccessManager, QNetworkReply

from .request import Request
from .response import Response

__all__ = ("Network",)

logger = getLogger(__name__)


class Network(QNetworkAccessManager):
    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.setAutoDeleteReplies(True)
        self.setRedirectPolicy(Request.RedirectPolicy.NoLessSafeRedirectPolicy)

    def _response_finished(self) -> None:
        response: Response = self.sender()
        if response.error() not in (
            Response.Error.NoError,
            Response.Error.OperationCanceledError,
        ):
            logger.warning(
                f"{response.route.name} {response.url().toString()} failed: "
                f"{response.error().name}({response.status_code()}) {response.error_string()}"
            )

    @staticmethod
    def _encode_body(data: dict | bytes | None) -> bytes:
        if isinstance(data, bytes):
            return data
        return QJsonDocument.fromVariant(data).toJson().data()

    def handle_request(self, request: Request) -> Response:
        logger.debug(f"Sending {request!r}")

        reply: QNetworkReply
        match request.route:
            case Request.Route.GET:
                reply = self.get(request)
            case Request.Route.POST:
                reply = self.post(request, self._encode_body(request.data))
            case Request.Route.PUT:
                reply = self.put(request, self._encode_body(request.data))
            case Request.Route.DELETE:
                reply = self.deleteResource(request)

        response = Response(self, request)
        response._connect_reply(reply)
        response.finished.connect(self._response_finished)
        return response
