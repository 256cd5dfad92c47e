"""
Per-domain repository modules for database access.

Helpers take the caller's `Session` and never commit: `UserStore` owns the
transaction boundary and composes the helpers inside it.
"""
