"""Utility functions for credgate.

Import convention: use module-level imports for clarity.

    from credgate.utils import isodatetime
    timestamp = isodatetime.now()
"""

from . import isodatetime

__all__ = ["isodatetime"]
