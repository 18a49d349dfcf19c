"""
HTTP routers.

Responsibilities:
- Map each /api resource to its service or store call.
- Wrap results in the ``{success, ...}`` envelope.
"""
