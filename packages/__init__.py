"""Shared packages for the expense tracker.

Modules here hold domain code that does not depend on Flask or the
database so it can be imported by the API, scripts, and tests alike.
"""
