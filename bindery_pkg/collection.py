import logging

from .errors import DuplicateSlugError

INDEX_FILENAME = 'index.html'

logger = logging.getLogger('Bindery.collection')


def assemble(pages):
    """
    Order pages newest first.

    Pages with the same date keep a deterministic order: ascending source
    path. Both passes are stable sorts, so the second one only reorders
    pages whose dates differ.
    """
    ordered = sorted(pages, key=lambda p: p.source_path)
    ordered.sort(key=lambda p: p.raw_date, reverse=True)
    return ordered


def check_unique_slugs(pages):
    """Fail when two pages, or a page and the index, would share an output file."""
    seen = {}
    for page in pages:
        if page.filename == INDEX_FILENAME:
            raise DuplicateSlugError(
                f"slug '{page.slug}' would overwrite the generated {INDEX_FILENAME}",
                page.source_path)
        previous = seen.get(page.output_path)
        if previous is not None:
            raise DuplicateSlugError(
                f"slug '{page.slug}' is also produced by {previous.source_path}",
                page.source_path)
        seen[page.output_path] = page
    logger.debug(f"Checked {len(seen)} unique output paths")
