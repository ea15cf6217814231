"""
Per-entity repository modules for database access.

Every function takes an open `Session` as its first argument; none of them
keep state between calls.
"""
