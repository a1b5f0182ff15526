"""Core business logic.

Modules:
- errors: Domain exception hierarchy
- progress: Progress records, ProgressStore and ProgressEngine
- identity: User accounts and password hashing
- tokens: Bearer token issuing and verification
- catalog: Read-only module catalog
- services: Wiring of the above into a TrainingPlatform
"""

__all__ = [
    "errors",
    "progress",
    "identity",
    "tokens",
    "catalog",
    "services",
]
