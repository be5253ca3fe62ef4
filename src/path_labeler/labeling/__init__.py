"""
Labeling

Policy loading and label reconciliation.
"""

from .loader import parse_policy, load_policy, load_policy_file
from .reconciler import reconcile

__all__ = ['parse_policy', 'load_policy', 'load_policy_file', 'reconcile']
