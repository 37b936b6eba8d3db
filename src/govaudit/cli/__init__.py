"""
govaudit CLI Package
"""

from .main import main, audit_queue, list_selectors, list_rules

__all__ = ['main', 'audit_queue', 'list_selectors', 'list_rules']
