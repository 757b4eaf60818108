import logging
import os
import sys

from PyQt6.QtCore import QCoreApplication, QStandardPaths

__all__ = ("app_data_path", "setup_logging")


LOG_FORMAT = "%(levelname)s:%(asctime)s:%(name)s - %(lineno)d: %(message)s"


def app_data_path() -> str:
    """Returns the app data path

    Returns
    -------
    str
        The path
    """
    if not QCoreApplication.applicationName():
        QCoreApplication.setApplicationName("readcomic")

    path = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppLocalDataLocation
    )
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

    return path


def setup_logging(*, verbose: bool = False) -> logging.Logger:
    """Configures the root logger once for the command line tool

    Parameters
    ----------
    verbose : bool
        Log debug messages to stderr instead of the log file

    Returns
    -------
    logging.Logger
        The ``readcomic`` logger
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format=LOG_FORMAT)
    else:
        logging.basicConfig(
            level=logging.INFO,
            filename=os.path.join(app_data_path(), "readcomic.log"),
            format=LOG_FORMAT,
        )
    return logging.getLogger("readcomic")

