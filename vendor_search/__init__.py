"""
Vendor directory search service.

Faceted filtering, ordering (including user-curated manual order), heuristic
relevance ranking and pagination over an in-memory vendor catalog, exposed
both as plain functions (``vendor_search.engine``) and as a small JSON API
(``vendor_search.app``).
"""
