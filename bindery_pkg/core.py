import os
import shutil
import logging
from dataclasses import dataclass
from concurrent.futures import ProcessPoolExecutor

from .errors import AccessError
from .loader import iter_source_documents
from .frontmatter import parse_document
from .markup import MarkupConverter, DEFAULT_HIGHLIGHT_STYLE
from .sanitizer import sanitize
from .pages import build_page
from .collection import assemble, check_unique_slugs, INDEX_FILENAME
from .render import Renderer

HIGHLIGHT_CSS_FILENAME = 'highlight.css'

# Multiprocessing pays off once there are enough documents to amortize worker startup
MULTIPROCESSING_THRESHOLD = 12

# Per-process DocumentProcessor used by pool workers
_worker_processor = None


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide values shared by every render. Built once per run."""

    site_title: str
    site_name: str
    site_author: str
    site_description: str
    year: int


class DocumentProcessor:
    """Turn one source document into a Page: parse, convert, sanitize, build."""

    def __init__(self, output_dir, highlight_style=DEFAULT_HIGHLIGHT_STYLE):
        self.output_dir = output_dir
        self.converter = MarkupConverter(highlight_style)
        self.logger = logging.getLogger('Bindery.processor')

    def process(self, source_path, raw):
        """Return the Page for a document, or None if it is a draft."""
        front_matter, body = parse_document(raw, source_path)
        if front_matter.draft:
            self.logger.debug(f"Skipping draft {source_path}")
            return None

        html_content = sanitize(self.converter.convert(body, source_path))
        page = build_page(front_matter, html_content, source_path, self.output_dir)
        self.logger.debug(f"Processed {source_path} -> {page.output_path}")
        return page


def initializer(output_dir, highlight_style):
    """Create the DocumentProcessor for a worker process."""
    global _worker_processor
    _worker_processor = DocumentProcessor(output_dir, highlight_style)


def process_document(source_path, raw):
    """Worker entry point."""
    return _worker_processor.process(source_path, raw)


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Site build completed in",
            "Total pages generated:",
            "Total drafts skipped:",
            "Processing",
            "Building index page",
            "Wrote",
            "Copied assets",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(log_file=None, verbose=False):
    """Set up the 'Bindery' logger: filtered console output plus an optional debug log file."""
    logger = logging.getLogger('Bindery')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        if not verbose:
            console_handler.addFilter(InfoFilter())
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

        if log_file:
            log_dir = os.path.dirname(os.path.abspath(log_file))
            os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(file_handler)

    return logger


class Bindery:
    """Build a static site from a directory of Markdown documents."""

    def __init__(self, content_dir, templates_dir, output_dir, site, assets_dir=None,
                 workers=None, clean=False, highlight_style=DEFAULT_HIGHLIGHT_STYLE,
                 page_template='page.html', index_template='index.html'):
        self.content_dir = content_dir
        self.templates_dir = templates_dir
        self.output_dir = output_dir
        self.site = site
        self.assets_dir = assets_dir
        self.workers = workers
        self.clean = clean
        self.highlight_style = highlight_style
        self.page_template = page_template
        self.index_template = index_template
        self.pages = []
        self.pages_generated = 0
        self.drafts_skipped = 0
        self.logger = logging.getLogger('Bindery')

    def build_pages(self):
        """Process every source document and return the published pages in content order."""
        documents = list(iter_source_documents(self.content_dir))
        if not documents:
            self.logger.warning(f"No markdown files found in {self.content_dir}")
            return []

        workers = self.workers
        if workers is None:
            workers = os.cpu_count() if len(documents) >= MULTIPROCESSING_THRESHOLD else 1

        if workers > 1:
            self.logger.info(f"Processing {len(documents)} files with {workers} workers")
            results = self._build_with_multiprocessing(documents, workers)
        else:
            self.logger.info(f"Processing {len(documents)} files")
            results = self._build_single_threaded(documents)

        pages = [page for page in results if page is not None]
        self.drafts_skipped = len(results) - len(pages)
        return pages

    def _build_single_threaded(self, documents):
        processor = DocumentProcessor(self.output_dir, self.highlight_style)
        return [processor.process(doc.path, doc.raw) for doc in documents]

    def _build_with_multiprocessing(self, documents, workers):
        results = []
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=initializer,
            initargs=(self.output_dir, self.highlight_style)
        ) as executor:
            futures = [executor.submit(process_document, doc.path, doc.raw) for doc in documents]
            try:
                # Results are consumed in submission order, so the first failing
                # document in content order is the one reported
                for future in futures:
                    results.append(future.result())
            except BaseException:
                for future in futures:
                    future.cancel()
                raise
        return results

    def render_site(self, renderer, pages):
        """Render every page and the index. Returns a list of (path, html)."""
        outputs = []
        for page in pages:
            outputs.append((page.output_path, renderer.render_page(page, self.site)))

        self.logger.info("Building index page")
        outputs.append((os.path.join(self.output_dir, INDEX_FILENAME),
                        renderer.render_index(pages, self.site)))
        return outputs

    def prepare_output_dir(self):
        """Create the output directory, removing it first when clean is set."""
        output = os.path.abspath(self.output_dir)
        if self.clean and os.path.exists(output):
            forbidden = {os.path.abspath(os.getcwd()), os.path.abspath(self.content_dir),
                         os.path.abspath(self.templates_dir)}
            if output in forbidden or os.path.abspath(self.content_dir).startswith(output + os.sep):
                raise AccessError("refusing to clean a directory that holds project sources", output)
            try:
                shutil.rmtree(output)
            except (IOError, OSError) as e:
                raise AccessError(f"failed to clean output directory: {e}", output) from e
        try:
            os.makedirs(output, exist_ok=True)
        except (IOError, OSError) as e:
            raise AccessError(f"failed to create output directory: {e}", output) from e

    def write_file(self, path, text):
        try:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(text)
        except (IOError, OSError, PermissionError) as e:
            raise AccessError(f"failed to write file: {e}", path) from e
        self.logger.debug(f"Generated HTML: {path}")

    def copy_assets_to_output(self):
        """Copy the assets directory into the output directory."""
        if not self.assets_dir:
            return
        if not os.path.isdir(self.assets_dir):
            self.logger.warning(f"Assets directory {self.assets_dir} not found, skipping")
            return
        destination = os.path.join(self.output_dir, os.path.basename(os.path.normpath(self.assets_dir)))
        try:
            shutil.copytree(self.assets_dir, destination, dirs_exist_ok=True)
        except (IOError, OSError, shutil.Error) as e:
            raise AccessError(f"failed to copy assets: {e}", self.assets_dir) from e
        self.logger.info(f"Copied assets from {self.assets_dir}")

    def build(self):
        """
        Run the full build.

        Nothing is written until every document has been parsed, converted
        and rendered, so a content or template error leaves the output
        directory as it was.
        """
        self.logger.info("Starting site build...")
        renderer = Renderer(self.templates_dir, self.page_template, self.index_template)
        highlight_css = MarkupConverter(self.highlight_style).highlight_css()

        pages = assemble(self.build_pages())
        check_unique_slugs(pages)
        outputs = self.render_site(renderer, pages)
        self.pages = pages

        self.prepare_output_dir()
        for path, html in outputs:
            self.write_file(path, html)
        self.write_file(os.path.join(self.output_dir, HIGHLIGHT_CSS_FILENAME), highlight_css)
        self.copy_assets_to_output()

        self.pages_generated = len(pages)
        self.logger.info(f"Wrote {len(outputs)} HTML files to {self.output_dir}")
        return pages
