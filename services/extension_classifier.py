"""
Extension classification for upload names.

Compound archive suffixes (``archive.tar.gz``, ``backup.tgz``) map to their
canonical compound extension; anything else uses the trailing segment after
the last dot, provided it is alphanumeric.
"""

from __future__ import annotations

from shared_utils.constants import COMPOUND_EXTENSIONS


def classify_extension(filename: str) -> str:
    """Return the extension to preserve for *filename*, or ``""``.

    >>> classify_extension("archive.tar.gz")
    'tar.gz'
    >>> classify_extension("backup.tgz")
    'tar.gz'
    >>> classify_extension("photo.png")
    'png'
    >>> classify_extension("notes.t-x-t")
    ''
    """
    for suffixes, canonical in COMPOUND_EXTENSIONS:
        for suffix in suffixes:
            if filename.endswith("." + suffix):
                return canonical

    if "." not in filename:
        return ""

    last_part = filename.rsplit(".", 1)[1]
    if last_part.isascii() and last_part.isalnum():
        return last_part
    return ""
