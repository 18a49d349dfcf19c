"""
Admin access control.

Responsibilities:
- Guard admin routes with the shared ``x-admin-key`` secret.
"""
