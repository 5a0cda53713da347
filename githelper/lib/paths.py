"""Normalization of IDE-provided path strings into filesystem paths."""

import logging
import re
from urllib.parse import unquote

logger = logging.getLogger(__name__)

FILE_SCHEME = "file://"

# "/c:/Users/x" after stripping file:// from a Windows URI; plain paths keep it
_DRIVE_PREFIX = re.compile(r'^/[A-Za-z]:[/\\]')


def normalize(raw: str) -> str:
    """
    Turn a folder URI or percent-encoded path into a plain filesystem path.

    Strips a leading file:// scheme, then percent-decodes. Applying it to an
    already-normalized path returns the path unchanged. Malformed escapes
    never raise: the undecoded (but scheme-stripped) string is returned so
    downstream existence checks simply fail.
    """
    if not raw:
        return raw

    is_uri = raw.startswith(FILE_SCHEME)
    path = raw[len(FILE_SCHEME):] if is_uri else raw

    try:
        path = unquote(path, errors="strict")
    except UnicodeDecodeError as e:
        logger.warning(f"Failed to decode workspace path {raw!r}: {e}")
        return path

    if is_uri and _DRIVE_PREFIX.match(path):
        path = path[1:]
    return path
