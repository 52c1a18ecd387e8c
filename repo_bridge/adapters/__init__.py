"""
Adapters layer for external system integrations.

This package contains adapters that wrap external services with clean,
normalized interfaces. Adapters handle transport, error translation and
data normalization so the services layer never sees raw responses.

Organization:
- repository/: content repository (folder tree, file lookup, folder creation)
"""
