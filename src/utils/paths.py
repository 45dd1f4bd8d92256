"""Path utility helpers."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Union


def normalise_root(path: Union[str, Path]) -> str:
    """Return ``path`` as an absolute string without a trailing separator.

    Symlinks are deliberately left unresolved: catalog entries are compared
    against the root by prefix, so the root must keep the spelling the
    scanner will produce.
    """

    text = os.path.abspath(os.path.expanduser(str(path)))
    if len(text) > 1:
        text = text.rstrip(os.sep) or os.sep
    return text


def basename(path: str) -> str:
    """Return everything after the final path separator."""

    return path.rsplit(os.sep, 1)[-1]


def is_beneath(path: str, root: str) -> bool:
    """Return ``True`` when ``path`` is ``root`` itself or lies below it."""

    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)
