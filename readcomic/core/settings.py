from __future__ import annotations

import os
from typing import TypeVar

from PyQt6.QtCore import pyqtSignal, QObject, QSettings

from . import utils

__all__ = ("AppSettings",)

T = TypeVar("T")


class AppSettings(QSettings):
    value_changed = pyqtSignal((str, object))

    def __init__(self, parent: QObject | None = None, *, path: str | None = None) -> None:
        if path is None:
            path = os.path.join(utils.app_data_path(), "config.ini")
        super().__init__(path, AppSettings.Format.IniFormat, parent)

    def value(self, key: str, defaultValue: T, type: type[T] | None = None) -> T:
        return super().value(key, defaultValue, type)

    def setValue(self, key: str, value: object) -> None:
        super().setValue(key, value)
        self.value_changed.emit(key, value)

    def get_string(self, key: str, default: str) -> str:
        return self.value(key, default, str)
