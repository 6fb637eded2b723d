#!/usr/bin/env python3
"""
Command-line interface for Bindery - static site generator.
"""

import os
import sys
import argparse
import time
import shutil
from typing import List, Optional

from . import __version__
from .core import Bindery, setup_logging
from .errors import BuildError
from .settings import BinderySettings

PACKAGE_TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')

SAMPLE_POST = """---
title: "Welcome to Bindery"
date: {date}
description: "Your first post."
draft: false
---

# Welcome

This post was created by `bindery --init`. Edit it in `content/welcome.md`.

## Code

```python
def hello():
    print("Hello from Bindery")
```

Footnotes work too.[^1]

[^1]: Like this one.
"""


def resolve_templates_dir(templates_dir: str) -> str:
    """Fall back to the packaged templates when a relative templates directory is missing."""
    if not os.path.isabs(templates_dir) and not os.path.exists(templates_dir):
        return PACKAGE_TEMPLATES_DIR
    return templates_dir


def create_starter_structure(base_dir: Optional[str] = None) -> None:
    """Create starter content and templates in base_dir (defaults to the current directory)."""
    base_dir = base_dir or os.getcwd()

    for directory in ['content', 'templates', os.path.join('assets', 'css')]:
        dir_path = os.path.join(base_dir, directory)
        if os.path.exists(dir_path):
            print(f"Directory already exists: {directory}")
        else:
            os.makedirs(dir_path, exist_ok=True)
            print(f"Created directory: {directory}")

    template_dest = os.path.join(base_dir, 'templates')
    for template_file in sorted(os.listdir(PACKAGE_TEMPLATES_DIR)):
        if not template_file.endswith('.html'):
            continue
        dest_path = os.path.join(template_dest, template_file)
        if os.path.exists(dest_path):
            print(f"Template already exists: templates/{template_file}")
        else:
            shutil.copy2(os.path.join(PACKAGE_TEMPLATES_DIR, template_file), dest_path)
            print(f"Created template: templates/{template_file}")

    post_path = os.path.join(base_dir, 'content', 'welcome.md')
    if os.path.exists(post_path):
        print("Sample post already exists: content/welcome.md")
    else:
        with open(post_path, 'w', encoding='utf-8') as f:
            f.write(SAMPLE_POST.format(date=time.strftime('%Y-%m-%d')))
        print("Created sample post: content/welcome.md")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Bindery - Static Site Generator')
    parser.add_argument('--content', type=str,
                        help='Content directory containing markdown files')
    parser.add_argument('--templates', type=str,
                        help='Templates directory')
    parser.add_argument('--output', type=str,
                        help='Output directory for generated site')
    parser.add_argument('--assets', type=str,
                        help='Assets directory to copy to output')
    parser.add_argument('--site-title', type=str, help='Site title')
    parser.add_argument('--site-name', type=str, help='Site name shown in the header')
    parser.add_argument('--site-author', type=str, help='Site author')
    parser.add_argument('--site-description', type=str, help='Site description')
    parser.add_argument('--workers', type=int,
                        help='Number of worker processes (default: automatic)')
    parser.add_argument('--clean', action='store_true', default=None,
                        help='Remove the output directory before writing')
    parser.add_argument('--log-file', type=str, help='Write a debug log to this file')
    parser.add_argument('--verbose', action='store_true',
                        help='Show debug output on the console')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter project')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.init:
        try:
            config_path = BinderySettings().create_sample_config(args.init)
        except BuildError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Created sample configuration file: {config_path}")
        print("\nCreating starter project structure...")
        create_starter_structure()
        print("\nRun 'bindery' to build your site.")
        return

    overall_start_time = time.time()

    try:
        settings_loader = BinderySettings()
        settings_loader.load_settings()

        args_dict = {k: v for k, v in vars(args).items() if v is not None}
        final_settings = settings_loader.merge_with_args(args_dict)

        logger = setup_logging(final_settings['log_file'], verbose=args.verbose)

        output_dir = os.path.expanduser(final_settings['output'])

        generator = Bindery(
            content_dir=final_settings['content'],
            templates_dir=resolve_templates_dir(final_settings['templates']),
            output_dir=output_dir,
            site=BinderySettings.site_config(final_settings),
            assets_dir=final_settings['assets'],
            workers=final_settings['workers'],
            clean=bool(final_settings['clean']),
            highlight_style=final_settings['highlight_style'],
            page_template=final_settings['page_template'],
            index_template=final_settings['index_template'],
        )
        generator.build()
    except BuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    total_time = time.time() - overall_start_time
    logger.info(f"Site build completed in {total_time:.6f} seconds.")
    logger.info(f"Total pages generated: {generator.pages_generated}")
    logger.info(f"Total drafts skipped: {generator.drafts_skipped}")


if __name__ == '__main__':
    main()
