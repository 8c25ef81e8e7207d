# clipshare/domain/services/__init__.py

"""
Background services bound to the store handle: view counting and
expired clip removal.
"""

from clipshare.domain.services.maintenance import Maintenance
from clipshare.domain.services.view_counter import ViewCounter

__all__ = [
    "Maintenance",
    "ViewCounter",
]
