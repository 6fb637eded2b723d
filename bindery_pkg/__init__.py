"""
Bindery - A small static site generator.

Bindery reads Markdown documents with YAML front matter, converts them to
sanitized HTML and renders them through Jinja2 templates into a directory
of static pages plus an index listing, newest first.
"""

__version__ = "1.0.0"

from .core import Bindery, DocumentProcessor, SiteConfig
from .errors import BuildError

__all__ = ['Bindery', 'DocumentProcessor', 'SiteConfig', 'BuildError']
