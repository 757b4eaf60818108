"""Image url recovery for ReadComicOnline chapter pages.

Chapter pages do not carry image urls. Instead a script block pushes one
token per image::

    lstImages.push('<token>');

A token is either a plain ``https`` url or an obscured blogspot path. The
obscured form is reversed by a fixed sequence of string operations followed
by a base64 decode. The offsets used below are whatever the site emits; they
do not follow from anything visible in the token, so they are kept exactly as
observed and covered by fixtures in the tests.
"""

from __future__ import annotations

import base64
import re
from enum import Enum
from typing import Iterable

from readcomic.source.models import Page

__all__ = (
    "BLOGSPOT_URL",
    "DescrambleError",
    "ScrambleVariant",
    "build_pages",
    "extract_tokens",
    "resolve_image_url",
)


BLOGSPOT_URL = "https://2.bp.blogspot.com/"

CHAPTER_IMAGES_REGEX = re.compile(r"lstImages\.push\('([^']*)'\)")

SUBSTITUTIONS = (("_x236", "d"), ("_x945", "g"))


class DescrambleError(Exception):
    """Raised when an obscured token does not decode to an image path."""

    def __init__(self, message: str = "failed to decrypt the image URL") -> None:
        super().__init__(message)


class ScrambleVariant(Enum):
    S0 = (3, "=s0")
    S1600 = (6, "=s1600")

    def __init__(self, trim: int, suffix: str) -> None:
        self.trim = trim
        self.suffix = suffix

    @classmethod
    def from_token(cls, token: str) -> ScrambleVariant:
        return cls.S0 if "=s0" in token else cls.S1600


def extract_tokens(script: str) -> list[str]:
    """Returns every pushed image token of a chapter script, in source order."""
    return CHAPTER_IMAGES_REGEX.findall(script)


def build_pages(tokens: Iterable[str]) -> list[Page]:
    return [Page(number=number, url="", token=token) for number, token in enumerate(tokens)]


def _substring(value: str, start: int, end: int | None = None) -> str:
    # plain slicing clamps, a token too short for the offsets has to fail instead
    end = len(value) if end is None else end
    if not 0 <= start <= end <= len(value):
        raise IndexError(
            f"substring [{start}, {end}) out of range for length {len(value)}"
        )
    return value[start:end]


def _char_at(value: str, index: int) -> str:
    if not 0 <= index < len(value):
        raise IndexError(f"index {index} out of range for length {len(value)}")
    return value[index]


def _decode_path(token: str, variant: ScrambleVariant) -> str:
    for old, new in SUBSTITUTIONS:
        token = token.replace(old, new)
    value = _substring(token, 0, len(token) - variant.trim)

    value = _substring(value, 4, 22) + _substring(value, 25)

    size = len(value)
    value = (
        _substring(value, 0, size - 6)
        + _char_at(value, size - 2)
        + _char_at(value, size - 1)
    )

    value = base64.b64decode(value, validate=True).decode("utf-8")

    value = _substring(value, 0, 13) + _substring(value, 17)
    return _substring(value, 0, len(value) - 2) + variant.suffix


def resolve_image_url(token: str) -> str:
    """Returns the url an image token points to.

    Parameters
    ----------
    token : str
        A token as pushed by the chapter script

    Returns
    -------
    str
        The token itself when it already is an ``https`` url, the decoded
        blogspot url otherwise

    Raises
    ------
    DescrambleError
        The token could not be decoded
    """
    if token.startswith("https"):
        return token

    variant = ScrambleVariant.from_token(token)
    try:
        path = _decode_path(token, variant)
    except (IndexError, ValueError) as e:
        raise DescrambleError() from e

    return BLOGSPOT_URL + path
