"""Services Layer — request flows: auth, consent, analysis, chat, education lookups.

Invariants:
    - Services take their collaborators (db session, AI client, catalog) as arguments
    - Services raise SkinSenseError subclasses; they never build HTTP responses

Design Decisions:
    - Plain async functions per flow; EducationService is the only stateful facade
"""
