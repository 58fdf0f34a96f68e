"""Order dashboard: normalization, querying and aggregation of shop orders"""

__version__ = '0.1.0'
