"""Models parts package.

One-class-per-file implementations of the unified data model. Prefer importing
from :mod:`unified_providers.base.models` for the stable surface.
"""
