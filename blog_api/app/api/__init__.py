"""
HTTP layer.

``router`` aggregates the per-resource routers from ``endpoints`` and
``deps`` wires the repositories to the store held by the running app.
"""
