"""Detection of the ``SET`` charset directive and transcoding to UTF-8.

Hunspell affix files declare their charset on a line such as
``SET ISO8859-1``. Dictionary files have no such line and follow the affix
file's charset in theory, but the same detection runs on both and falls back
to UTF-8 when no directive is present.

Labels are looked up in the Python codec registry, except that ISO-8859-1 and
ASCII labels decode as windows-1252, as web browsers and the WHATWG encoding
registry do: dictionaries declared ISO8859-1 often carry typographic quotes or
the euro sign in the 0x80-0x9F range.
"""

from __future__ import annotations

import codecs
import logging
from pathlib import Path

LOGGER = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"
_DIRECTIVE = b"SET "
_UTF8 = codecs.lookup("utf-8").name
_WINDOWS_1252_ALIASES = frozenset({codecs.lookup("iso8859-1").name, codecs.lookup("ascii").name})


def detect_encoding(path: Path) -> str:
    """Return the label of the first ``SET`` line of ``path``, or ``utf-8``.

    Lines are split on the newline byte and matched on raw bytes, so the file
    does not need to be decodable. Raises :class:`OSError` when unreadable and
    :class:`UnicodeDecodeError` when the label itself is not ASCII.
    """

    with path.open("rb") as handle:
        for line in handle:
            if line.startswith(_DIRECTIVE):
                return line[len(_DIRECTIVE) :].decode("ascii").rstrip()
    return DEFAULT_ENCODING


def resolve_codec(label: str) -> codecs.CodecInfo:
    """Look ``label`` up in the codec registry (case-insensitive).

    Raises :class:`LookupError` for unknown labels and for codecs that are not
    character encodings (``base64``, ``zlib``, ``rot13``...).
    """

    codec = codecs.lookup(label)
    if not getattr(codec, "_is_text_encoding", True):
        raise LookupError(f"{label!r} is not a text encoding")
    if codec.name in _WINDOWS_1252_ALIASES:
        return codecs.lookup("cp1252")
    return codec


def is_utf8(codec: codecs.CodecInfo) -> bool:
    return codec.name == _UTF8


def transcode(raw: bytes, label: str, codec: codecs.CodecInfo) -> bytes:
    """Decode ``raw`` with ``codec`` and re-encode it as UTF-8.

    The first ``SET <label>`` occurrence is rewritten to ``SET UTF-8`` so the
    engine reads the converted file with the right charset.
    """

    if is_utf8(codec):
        return raw
    text = codec.decode(raw, "replace")[0]
    text = text.replace(f"SET {label}", "SET UTF-8", 1)
    LOGGER.debug("Transcoded %d bytes from %s to UTF-8", len(raw), codec.name)
    return text.encode("utf-8")


__all__ = ["DEFAULT_ENCODING", "detect_encoding", "resolve_codec", "is_utf8", "transcode"]
