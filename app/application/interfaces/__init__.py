"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    IRecordRepository,
    ITenantRepository,
    IUserRepository,
)
from app.application.interfaces.services import (
    IAuditLogger,
    IAuditWriter,
    IPasswordHasher,
    IPhotoStorage,
    ISessionStore,
)

__all__ = [
    "IAuditLogger",
    "IAuditWriter",
    "IPasswordHasher",
    "IPhotoStorage",
    "IRecordRepository",
    "ISessionStore",
    "ITenantRepository",
    "IUserRepository",
]
