"""Immutable HTTP primitives: headers, query items, media types, request, response."""
