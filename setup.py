#!/usr/bin/env python3
"""
Setup script for Bindery - static site generator.
"""

from setuptools import setup, find_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='bindery',
    version='1.0.0',
    description='A static site generator: Markdown with YAML front matter to sanitized HTML via Jinja2',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'bindery_pkg': [
            'templates/*.html',
        ],
    },
    include_package_data=True,
    install_requires=[
        'Jinja2>=3.0',
        'MarkupSafe>=2.0',
        'Markdown>=3.4',
        'Pygments>=2.12',
        'PyYAML>=6.0',
        'nh3>=0.2.14',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP :: Site Management',
        'Topic :: Software Development :: Code Generators',
        'Topic :: Text Processing :: Markup :: HTML',
    ],
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'bindery=bindery_pkg.cli:main',
        ],
    },
    keywords='static site generator, markdown, jinja2, blog, website',
)
