"""Core Layer — domain logic with no network IO.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - Store state lives in CharacterStore instances, never in module globals
"""
