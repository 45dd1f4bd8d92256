"""Extension based content classification."""
from __future__ import annotations

import os
from enum import IntEnum
from typing import Callable, Dict, Optional, Union


class Category(IntEnum):
    """Content categories; values double as the external selector codes."""

    AUDIO = 1
    VIDEO = 2
    EBOOK = 3
    IMAGE = 4
    PACKAGE = 5
    UNKNOWN = 0xFF

    @classmethod
    def coerce(cls, value: Union["Category", int, str, None]) -> Optional["Category"]:
        """Return the matching member, or ``None`` for anything unrecognised."""

        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str) and value.strip().isdecimal():
            return cls.coerce(int(value.strip()))
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


AUDIO_EXTENSIONS = frozenset(
    "mp3 wav ogg flac aac m4a wma ape amr awb mid midi mka ra ac3 aiff".split()
)
VIDEO_EXTENSIONS = frozenset(
    "mp4 mkv avi mov wmv flv webm m4v mpeg mpg ts 3gp rm rmvb vob asf f4v".split()
)
EBOOK_EXTENSIONS = frozenset("txt epub pdf umd chm fb2 mobi".split())
IMAGE_EXTENSIONS = frozenset("jpg jpeg png gif bmp webp wbmp".split())
PACKAGE_EXTENSIONS = frozenset({"apk"})

ExtensionPredicate = Callable[[str], bool]
PathPredicate = Callable[[str], bool]


def extension_of(path: str) -> str:
    """Return the lowercased text after the last ``.`` of the basename.

    An empty string is returned when the name has no ``.`` or ends with one.
    """

    name = os.path.basename(path)
    dot = name.rfind(".")
    if dot < 0:
        return ""
    return name[dot + 1 :].lower()


def is_audio(ext: str) -> bool:
    return ext in AUDIO_EXTENSIONS


def is_video(ext: str) -> bool:
    return ext in VIDEO_EXTENSIONS


def is_ebook(ext: str) -> bool:
    return ext in EBOOK_EXTENSIONS


def is_image(ext: str) -> bool:
    return ext in IMAGE_EXTENSIONS


def is_package(ext: str) -> bool:
    return ext in PACKAGE_EXTENSIONS


PREDICATES: Dict[Category, ExtensionPredicate] = {
    Category.AUDIO: is_audio,
    Category.VIDEO: is_video,
    Category.EBOOK: is_ebook,
    Category.IMAGE: is_image,
    Category.PACKAGE: is_package,
}


def predicate_for(category: Union[Category, int, str, None]) -> Optional[ExtensionPredicate]:
    """Look up the extension predicate for ``category``."""

    member = Category.coerce(category)
    if member is None:
        return None
    return PREDICATES.get(member)


def path_predicate(category: Union[Category, int, str, None]) -> Optional[PathPredicate]:
    """Return a predicate over file paths for ``category``, or ``None``."""

    predicate = predicate_for(category)
    if predicate is None:
        return None

    def accept(path: str) -> bool:
        return predicate(extension_of(path))

    return accept


def classify(ext: str) -> Category:
    """Return the first category whose extension set holds ``ext``."""

    ext = ext.lower()
    for category, predicate in PREDICATES.items():
        if predicate(ext):
            return category
    return Category.UNKNOWN


def classify_path(path: str) -> Category:
    return classify(extension_of(path))
