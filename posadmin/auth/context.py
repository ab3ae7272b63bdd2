from dataclasses import dataclass
from typing import Optional

from posadmin.accounts.schemas import Profile
from posadmin.rbac.roles import Role
from .schemas import Identity


@dataclass(frozen=True)
class Viewer:
    """
    Who is making the current request.

    Built once per request by RoleAccessMiddleware and handed to services
    explicitly. `profile` is None when the identity has no profile row.
    """

    identity: Identity
    profile: Optional[Profile] = None

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def role(self) -> Optional[Role]:
        return self.profile.role if self.profile else None
