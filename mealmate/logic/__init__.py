"""Client-side workflow logic.

Subpackages:
- planning: weekly suggestion wizard (constraints -> suggestions -> approval), manual picker, week view
- settings: optimistic edits of store settings
- auth: signed-in session lifecycle
- household: role-gated household membership and recipe submissions
"""
__all__ = ["planning", "settings", "auth", "household"]
