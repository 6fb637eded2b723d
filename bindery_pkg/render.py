import os
import logging
from datetime import date

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, select_autoescape
from jinja2 import TemplateError as Jinja2Error

from .errors import TemplateError

HELPER_DATE_FORMAT = '%b %d %Y'


def format_date(value):
    """Format a raw date for display inside templates, e.g. 'Jan 02 2024'."""
    if not isinstance(value, date):
        raise TypeError(f"format_date expects a date, got {type(value).__name__}")
    return value.strftime(HELPER_DATE_FORMAT)


class Renderer:
    """Render pages and the index through named Jinja2 templates."""

    def __init__(self, templates_dir, page_template='page.html', index_template='index.html'):
        self.templates_dir = templates_dir
        self.page_template = page_template
        self.index_template = index_template
        self.logger = logging.getLogger('Bindery.render')

        if not os.path.isdir(templates_dir):
            raise TemplateError("templates directory does not exist", templates_dir)

        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(['html', 'xml']),
            undefined=StrictUndefined,
        )
        self.env.filters['format_date'] = format_date
        self.env.globals['format_date'] = format_date
        self.load_templates()

    def load_templates(self):
        """Compile every HTML template once and make sure the required ones exist."""
        names = self.env.list_templates(filter_func=lambda n: n.endswith('.html'))
        for name in names:
            self._get_template(name)
        for required in (self.page_template, self.index_template):
            if required not in names:
                raise TemplateError(f"required template '{required}' not found", self.templates_dir)
        self.logger.debug(f"Loaded {len(names)} templates from {self.templates_dir}")

    def _get_template(self, template_name):
        try:
            return self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateError(f"template '{e.name}' not found",
                                os.path.join(self.templates_dir, template_name)) from e
        except Jinja2Error as e:
            raise TemplateError(f"failed to load template: {e}",
                                os.path.join(self.templates_dir, template_name)) from e

    def render(self, template_name, **data):
        """Render a template by name with the given data and return the HTML."""
        template = self._get_template(template_name)
        try:
            return template.render(**data)
        except (Jinja2Error, TypeError, ValueError, AttributeError) as e:
            raise TemplateError(f"failed to render template '{template_name}': {e}",
                                os.path.join(self.templates_dir, template_name)) from e

    def template_for(self, page):
        """Return the template name for a page, honouring its layout."""
        if page.layout:
            return f"page-{page.layout}.html"
        return self.page_template

    def render_page(self, page, site):
        try:
            return self.render(self.template_for(page), page=page, site=site)
        except TemplateError as e:
            raise TemplateError(f"{e.message} (rendering {page.source_path})", e.path) from e

    def render_index(self, pages, site):
        return self.render(self.index_template, site=site, posts=pages)
