"""
Per-domain repository modules for database access.

Route handlers call these functions and never build queries themselves.
"""
