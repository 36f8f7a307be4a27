"""Test utilities for restroute applications.

::

    from restroute.testing import TestClient
"""

from restroute.testing.client import TestClient

__all__ = ["TestClient"]
