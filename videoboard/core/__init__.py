"""
Core utilities shared across the videoboard API.

This package hosts:
- configuration helpers (env vars, paths, storage selection)
- logging setup
- the storage error hierarchy used by repositories and routers
"""
