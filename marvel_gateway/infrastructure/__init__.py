"""Infrastructure Layer — upstream HTTP client and logging setup.

Invariants:
    - Infrastructure never imports from api/
    - Upstream failures always surface as UpstreamAPIError
"""
