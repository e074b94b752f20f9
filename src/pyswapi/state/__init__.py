"""State/store layer.

This package is the single source of truth for how fetched resources,
assembled pages and the current selection are folded into one immutable
application state.
"""
