"""Test utilities for routehint applications::

    from routehint.testing import TestClient
"""

from routehint.testing.client import TestClient

__all__ = ["TestClient"]
