import logging

import markdown
from pygments.formatters import HtmlFormatter
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .errors import ConvertMarkdownError, ConfigError

DEFAULT_HIGHLIGHT_STYLE = 'gruvbox-dark'
HIGHLIGHT_CSS_CLASS = 'highlight'


class MarkupConverter:
    """Convert Markdown bodies to HTML with footnotes, heading anchors and highlighted code."""

    def __init__(self, highlight_style=DEFAULT_HIGHLIGHT_STYLE):
        try:
            get_style_by_name(highlight_style)
        except ClassNotFound as e:
            raise ConfigError(f"unknown highlight style: {highlight_style!r}") from e
        self.highlight_style = highlight_style
        self.logger = logging.getLogger('Bindery.markup')
        self.markdown_parser = self.create_markdown_parser()

    def create_markdown_parser(self):
        """Create a Python-Markdown instance with the build's fixed extension set."""
        return markdown.Markdown(
            extensions=['fenced_code', 'tables', 'footnotes', 'toc', 'codehilite'],
            extension_configs={
                'codehilite': {
                    'css_class': HIGHLIGHT_CSS_CLASS,
                    'pygments_style': self.highlight_style,
                    'guess_lang': False,
                },
            },
            output_format='html',
        )

    def convert(self, text, path=None):
        """Convert a Markdown body to an HTML fragment."""
        try:
            # Reset per document so footnote numbers and heading ids start fresh
            return self.markdown_parser.reset().convert(text)
        except Exception as e:
            self.logger.debug(f"Markdown conversion failed for {path}", exc_info=True)
            raise ConvertMarkdownError(f"failed to convert markdown: {e}", path) from e

    def highlight_css(self):
        """Return the stylesheet for highlighted code blocks."""
        formatter = HtmlFormatter(style=self.highlight_style)
        return formatter.get_style_defs(f'.{HIGHLIGHT_CSS_CLASS}')
