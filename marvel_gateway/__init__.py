"""Marvel Gateway — upstream Marvel search proxy plus an in-memory local character store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
