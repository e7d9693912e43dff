"""
Utility functions for the diet tracker.
"""
from .time_utils import DATE_FORMAT, format_date, parse_date, parse_iso_date
from .docs_renderer import render_explanation, list_available_topics, find_topic

__all__ = [
    'DATE_FORMAT',
    'format_date',
    'parse_date',
    'parse_iso_date',
    'render_explanation',
    'list_available_topics',
    'find_topic',
]
