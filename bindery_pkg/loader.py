import os
import logging
from collections import namedtuple

from .errors import AccessError

CONTENT_EXTENSION = '.md'

logger = logging.getLogger('Bindery.loader')

SourceDocument = namedtuple('SourceDocument', ['path', 'raw'])
SourceDocument.__doc__ = "Raw bytes of a content file together with its path."


def is_content_file(path):
    """Return True if the file extension marks it as a Markdown document."""
    return os.path.splitext(path)[1] == CONTENT_EXTENSION


def _raise_access_error(error):
    raise AccessError(f"error accessing directory: {error.strerror or error}", error.filename)


def iter_source_documents(content_dir):
    """
    Walk content_dir recursively and yield a SourceDocument for every Markdown file.

    Directories and file names are visited in sorted order so that the
    enumeration order is the same on every platform. Any file-system error
    aborts the walk with an AccessError.
    """
    if not os.path.isdir(content_dir):
        raise AccessError("content directory does not exist", content_dir)

    for root, dirs, files in os.walk(content_dir, onerror=_raise_access_error):
        dirs.sort()
        for name in sorted(files):
            if not is_content_file(name):
                continue
            path = os.path.join(root, name)
            try:
                with open(path, 'rb') as f:
                    raw = f.read()
            except (IOError, OSError) as e:
                raise AccessError(f"failed to read file: {e.strerror or e}", path) from e
            logger.debug(f"Loaded {path} ({len(raw)} bytes)")
            yield SourceDocument(path, raw)
