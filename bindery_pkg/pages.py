import os
from dataclasses import dataclass
from datetime import datetime

from markupsafe import Markup

from .loader import CONTENT_EXTENSION

DISPLAY_DATE_FORMAT = '%Y-%m-%d'


@dataclass(frozen=True)
class Page:
    """A published document, ready to be rendered."""

    title: str
    description: str
    date: str
    raw_date: datetime
    content: Markup
    slug: str
    output_path: str
    source_path: str
    layout: str = ''

    @property
    def filename(self):
        return self.slug + '.html'


def slugify(path):
    """Derive the output slug from a source file name."""
    name = os.path.basename(path)
    if name.endswith(CONTENT_EXTENSION):
        name = name[:-len(CONTENT_EXTENSION)]
    return name.lower().replace(' ', '-')


def build_page(front_matter, html_content, source_path, output_dir):
    """Assemble a Page from parsed metadata and sanitized HTML."""
    slug = slugify(source_path)
    return Page(
        title=front_matter.title,
        description=front_matter.description,
        date=front_matter.date.strftime(DISPLAY_DATE_FORMAT),
        raw_date=front_matter.date,
        content=Markup(html_content),
        slug=slug,
        output_path=os.path.join(output_dir, slug + '.html'),
        source_path=source_path,
        layout=front_matter.layout,
    )
