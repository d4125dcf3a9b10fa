"""
Feed Aggregator - static news page builder.

This package fetches a set of RSS/Atom feeds, merges their entries into a
single deduplicated, newest-first list and renders it as a static HTML page.
"""

__version__ = "0.1.0"
