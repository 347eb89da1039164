"""
Row-level access policies.

Every generic store operation is filtered through the policy of its table.
Predicates are SQL fragments that may reference the caller through the
:caller parameter; an anonymous caller binds NULL, which never equals an
owner column.

    table             select             insert  update  delete
    profiles          owner              owner   owner   -
    resumes           owner OR public    owner   owner   owner
    resume_templates  everyone           -       -       -

A "-" means the application has no path to that operation.
"""

from dataclasses import dataclass
from typing import Optional

OWNER = "user_id = :caller"
OWNER_OR_PUBLIC = "(user_id = :caller OR is_public = 1)"
EVERYONE = "1 = 1"


@dataclass(frozen=True)
class Identity:
    """
    The authenticated principal making a request.

    Passed explicitly into every operation that needs authorization.

    Attributes:
        user_id: Identifier of the user row
        email: Sign-in email
    """
    user_id: str
    email: str = ""


@dataclass(frozen=True)
class TablePolicy:
    """
    Access predicates for one table.

    Attributes:
        select: Visibility predicate (None: no read path)
        update: Rows the caller may update (None: no update path)
        delete: Rows the caller may delete (None: no delete path)
        insert_owned: Whether the caller may insert rows it owns
    """
    select: Optional[str] = None
    update: Optional[str] = None
    delete: Optional[str] = None
    insert_owned: bool = False

    def predicate(self, operation: str) -> Optional[str]:
        return getattr(self, operation)


POLICIES = {
    "profiles": TablePolicy(select=OWNER, update=OWNER, insert_owned=True),
    "resumes": TablePolicy(
        select=OWNER_OR_PUBLIC, update=OWNER, delete=OWNER, insert_owned=True
    ),
    "resume_templates": TablePolicy(select=EVERYONE),
}


def caller_id(identity: Optional[Identity]) -> Optional[str]:
    """User id bound to :caller (None for anonymous requests)."""
    return identity.user_id if identity is not None else None


def get_policy(table: str) -> Optional[TablePolicy]:
    """Policy for a table, or None when the application has no access path to it."""
    return POLICIES.get(table)
