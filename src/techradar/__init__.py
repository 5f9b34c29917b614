"""
techradar - Content model and change tracking for a technology radar.

Layout:
- techradar.model: schemas, ordinal mapper, consistency checker, change extractor
- techradar.content: front-matter loading and writing
- techradar.authoring / techradar.importer: read-modify-write helpers
- techradar.build: JSON artifact generation
- techradar.cli: ``techradar`` command-line interface
"""

__version__ = "0.1.0"

from techradar.model import *  # noqa
