"""Order normalization"""

from .normalizer import FIELD_POLICIES, FieldPolicy, is_pickup_method, normalize, normalize_all

__all__ = ['FIELD_POLICIES', 'FieldPolicy', 'is_pickup_method', 'normalize', 'normalize_all']
