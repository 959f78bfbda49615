"""SkinSense Application Package — consent-gated skin image analysis API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
