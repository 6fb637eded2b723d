"""Test configuration and fixtures for Bindery tests."""

import os
import sys
import pytest
import tempfile
import shutil
from pathlib import Path
from datetime import datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from bindery_pkg.core import SiteConfig

@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)

@pytest.fixture
def write_doc():
    """Return a helper that writes a markdown document with front matter."""
    def _write(directory, name, front_matter, body="Some text.\n"):
        path = Path(directory) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"---\n{front_matter}\n---\n{body}", encoding='utf-8')
        return str(path)
    return _write

@pytest.fixture
def mock_content_dir(temp_dir, write_doc):
    """Create a content directory with two published posts, a draft and a non-markdown file."""
    content_dir = Path(temp_dir) / 'content'
    content_dir.mkdir()

    write_doc(content_dir, 'January Post.md',
              'title: January\ndate: 2024-01-01\ndescription: First of the year',
              "# Happy New Year\n\nText with a footnote.[^1]\n\n[^1]: The note.\n")
    write_doc(content_dir, 'posts/june.md',
              'title: June\ndate: 2024-06-01\ndraft: false',
              "```python\ndef hello():\n    return 1\n```\n")
    write_doc(content_dir, 'unfinished.md',
              'title: Unfinished\ndate: 2024-07-01\ndraft: true',
              "Not ready yet.\n")
    (content_dir / 'notes.txt').write_text('not content')

    return str(content_dir)

@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create a templates directory with page and index templates."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()

    base_template = templates_dir / 'base.html'
    base_template.write_text("""<!DOCTYPE html>
<html>
<head>
    <title>{% block title %}{{ site.site_title }}{% endblock %}</title>
</head>
<body>
    {% block content %}{% endblock %}
    <footer>{{ site.year }} {{ site.site_author }}</footer>
</body>
</html>""")

    page_template = templates_dir / 'page.html'
    page_template.write_text("""{% extends "base.html" %}
{% block title %}{{ page.title }}{% endblock %}
{% block content %}
<article>
    <h1 class="title">{{ page.title }}</h1>
    <p class="date">{{ page.date }}</p>
    <p class="pretty-date">{{ page.raw_date|format_date }}</p>
    <div class="content">{{ page.content }}</div>
</article>
{% endblock %}""")

    index_template = templates_dir / 'index.html'
    index_template.write_text("""{% extends "base.html" %}
{% block content %}
<ul>
{% for post in posts %}
    <li><a href="{{ post.slug }}.html">{{ post.title }}</a> {{ format_date(post.raw_date) }}</li>
{% endfor %}
</ul>
{% endblock %}""")

    return str(templates_dir)

@pytest.fixture
def mock_output_dir(temp_dir):
    """Path of a not yet existing output directory."""
    return str(Path(temp_dir) / 'build')

@pytest.fixture
def site_config():
    """Site configuration used across tests."""
    return SiteConfig(
        site_title='Test Site',
        site_name='Test',
        site_author='Jane Doe',
        site_description='A test blog',
        year=2024,
    )

@pytest.fixture
def utc():
    """Shortcut for building aware datetimes."""
    def _utc(*args):
        return datetime(*args, tzinfo=timezone.utc)
    return _utc
