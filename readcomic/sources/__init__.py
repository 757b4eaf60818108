from .readcomiconline import ReadComicOnline


def _default_sources() -> list:
    return [
        ReadComicOnline,
    ]
