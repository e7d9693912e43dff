"""
Chart generation.
"""
from .chart_builder import ChartBuilder

__all__ = ['ChartBuilder']
