"""Middleware for routehint apps.

``RouteHint`` explains unmatched requests against every registered route.
"""

from routehint.middleware.hint import RouteHint
from routehint.middleware.protocol import AnyResponse, Middleware, Next, RouteAware

__all__ = ["AnyResponse", "Middleware", "Next", "RouteAware", "RouteHint"]
