"""Analysis functionality"""

from .analyzer import Metrics, MetricsCalculator, OrderAnalyzer

__all__ = ['Metrics', 'MetricsCalculator', 'OrderAnalyzer']
