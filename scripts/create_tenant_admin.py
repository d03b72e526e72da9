"""Create a tenant and its first user (Postgres only).

Usage:
    python -m scripts.create_tenant_admin "<tenant name>" <email> <first name> <last name>
The user is created active and without a password, so the first login
goes through the set-password flow. All imports use app.*.
"""

import asyncio
import sys

from pydantic import ValidationError

from app.application.dtos.auth import TenantContext
from app.application.services import AuditLogger, RecordService, TenantService
from app.core.config import get_settings
from app.domain.record_fields import USER_ENTITY
from app.infrastructure.persistence.database import Database
from app.infrastructure.persistence.repositories import TenantRepository, UserRepository
from app.infrastructure.security import BcryptPasswordHasher
from app.infrastructure.services import SqlAuditWriter
from app.schemas.tenant import TenantAdminRequest
from app.shared.logging import setup_logging

USAGE = (
    'Usage: python -m scripts.create_tenant_admin "<tenant name>" <email> '
    "<first name> <last name>"
)


async def main() -> None:
    """Create the tenant (allocated TenantId) and its admin user in one transaction."""
    if len(sys.argv) != 5:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    try:
        request = TenantAdminRequest(
            tenant_name=sys.argv[1],
            email=sys.argv[2],
            first_name=sys.argv[3],
            last_name=sys.argv[4],
        )
    except ValidationError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    settings = get_settings()
    setup_logging()
    database = Database.from_settings(settings)
    if not database.configured:
        print("DATABASE_URL is not set", file=sys.stderr)
        sys.exit(1)
    audit_logger = AuditLogger(SqlAuditWriter(database, table_name=settings.audit_table_name))

    try:
        async with database.session() as session:
            tenants = TenantService(
                TenantRepository(session),
                audit_logger,
                max_attempts=settings.tenant_code_max_attempts,
            )
            tenant = await tenants.create_tenant(request.tenant_name)
            # No acting user yet: provenance falls back to "system".
            bootstrap = TenantContext(
                user_id=0, email=None, tenant_id=tenant.tenant_id, tenant_user_id=None
            )
            users = RecordService(
                USER_ENTITY,
                UserRepository(session),
                audit_logger,
                BcryptPasswordHasher(settings.bcrypt_rounds),
                max_attempts=settings.tenant_code_max_attempts,
            )
            created = await users.create(
                bootstrap,
                {
                    "FirstName": request.first_name,
                    "LastName": request.last_name,
                    "Email": str(request.email),
                    "Active": 1,
                },
            )
    finally:
        await database.dispose()

    print(f"Created tenant: {tenant.tenant_id} ({tenant.tenant_name})")
    print(f"Created user: {created.id} ({request.email}) TenantUserId {created.tenant_user_id}")
    print("The user sets a password at first login.")


if __name__ == "__main__":
    asyncio.run(main())
