"""Routing — route templates and a compiled route table.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. The same frozen ``Route`` objects
are what the route-hint explainer compares requests against.
"""
