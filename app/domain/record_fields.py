"""Field registry for the tenant-scoped record kinds (Users, Clients).

Each entity kind is described once: the column names it accepts from a
request, how each one is normalized, and which ones are required. The
record service, the diff and the repositories all read these definitions
instead of hard-coding per-entity field lists.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.domain.enums import FieldKind

# Provenance columns: set by the system, never accepted from input, never diffed.
IMMUTABLE_FIELDS = frozenset(
    {
        "Id",
        "TenantId",
        "TenantUserId",
        "CreatedBy",
        "CreatedDate",
        "UpdatedBy",
        "UpdatedDate",
    }
)


@dataclass(frozen=True)
class FieldSpec:
    """One writable column of a record.

    Attributes:
        name: Column name as it appears in the database and audit payloads.
        attr: ORM attribute name.
        kind: Normalization rule.
        aliases: Extra request keys accepted for this column.
    """

    name: str
    attr: str
    kind: FieldKind = FieldKind.TEXT
    aliases: tuple[str, ...] = ()

    def keys(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)


@dataclass(frozen=True)
class EntityDefinition:
    """Describes one record kind."""

    table_name: str
    label: str
    fields: tuple[FieldSpec, ...]
    required: tuple[str, ...] = ("FirstName", "LastName", "Email")
    deletable: bool = False
    _by_name: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_name", {f.name: f for f in self.fields})

    def spec(self, name: str) -> FieldSpec:
        return self._by_name[name]

    @property
    def kinds(self) -> dict[str, FieldKind]:
        """Column name -> kind, as used by the diff."""
        return {f.name: f.kind for f in self.fields}

    def extract(self, submitted: Mapping[str, Any]) -> dict[str, Any]:
        """Pick the writable columns present in a request body.

        Only keys that were actually submitted are returned (merge
        semantics for updates). Provenance and scoping columns such as
        TenantId or TenantUserId are dropped even if a client sends them.

        Args:
            submitted: Raw JSON object or form fields.

        Returns:
            Column name -> raw submitted value.
        """
        picked: dict[str, Any] = {}
        for spec in self.fields:
            for key in spec.keys():
                if key in submitted:
                    picked[spec.name] = submitted[key]
                    break
        return picked


_PERSON_FIELDS = (
    FieldSpec("FirstName", "first_name", aliases=("firstName",)),
    FieldSpec("LastName", "last_name", aliases=("lastName",)),
    FieldSpec("Email", "email", aliases=("email",)),
    FieldSpec("Comments", "comments", aliases=("comments",)),
    FieldSpec("Photo", "photo"),
    FieldSpec("Active", "active", FieldKind.BIT, aliases=("active",)),
    FieldSpec("Password", "password", FieldKind.SECRET, aliases=("password",)),
)

USER_ENTITY = EntityDefinition(
    table_name="Users",
    label="User",
    fields=_PERSON_FIELDS,
    deletable=True,
)

CLIENT_ENTITY = EntityDefinition(
    table_name="Clients",
    label="Client",
    fields=(
        *_PERSON_FIELDS,
        FieldSpec("Phone", "phone", aliases=("phone",)),
        FieldSpec("Address", "address", aliases=("address",)),
        FieldSpec("City", "city", aliases=("city",)),
        FieldSpec("State", "state", aliases=("state",)),
        FieldSpec("Zip", "zip", aliases=("zip",)),
        FieldSpec("Country", "country", aliases=("country",)),
        FieldSpec("DateOfBirth", "date_of_birth", FieldKind.DATE, aliases=("dateOfBirth",)),
        FieldSpec("Gender", "gender", aliases=("gender",)),
    ),
)
