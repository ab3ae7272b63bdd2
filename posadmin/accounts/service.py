"""
Account service — scoped CRUD over the profile store.

Two scopes exist:
  - ALL           the superadmin panel, every profile
  - OWN_CASHIERS  the admin panel, cashiers whose created_by is the viewer

Rows outside the caller's scope are reported as missing, never as forbidden.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from posadmin.auth.context import Viewer
from posadmin.auth.service import IdentityProvider
from posadmin.rbac.roles import Role, can_create
from posadmin.utils import Logger
from posadmin.utils.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from .listing import ListingQuery, Page, apply_listing
from .schemas import Profile
from .store import ProfileStore

logger = Logger("accounts")


class AccountScope(str, Enum):
    ALL = "all"
    OWN_CASHIERS = "own_cashiers"


# Roles allowed to operate each panel
SCOPE_ROLES: dict[AccountScope, frozenset[Role]] = {
    AccountScope.ALL: frozenset({Role.SUPERADMIN}),
    AccountScope.OWN_CASHIERS: frozenset({Role.ADMIN, Role.SUPERADMIN}),
}


class AccountService:
    def __init__(self, profiles: ProfileStore, identities: IdentityProvider):
        self.profiles = profiles
        self.identities = identities

    # ── Scope helpers ────────────────────────────────────────────
    @staticmethod
    def _check_scope(viewer: Viewer, scope: AccountScope) -> None:
        if viewer.role not in SCOPE_ROLES[scope]:
            raise ForbiddenError("You cannot manage these accounts")

    @staticmethod
    def _in_scope(viewer: Viewer, scope: AccountScope, profile: Profile) -> bool:
        if scope is AccountScope.ALL:
            return True
        return profile.role is Role.CASHIER and profile.created_by == viewer.id

    async def _get_in_scope(
        self, viewer: Viewer, scope: AccountScope, profile_id: str
    ) -> Profile:
        self._check_scope(viewer, scope)
        profile = await self.profiles.get(profile_id)
        if profile is None or not self._in_scope(viewer, scope, profile):
            raise NotFoundError("Account not found")
        return profile

    # ── Listing ──────────────────────────────────────────────────
    async def list_scoped(self, viewer: Viewer, scope: AccountScope) -> list[Profile]:
        """Every profile in scope, newest first."""
        self._check_scope(viewer, scope)
        if scope is AccountScope.ALL:
            return await self.profiles.list()
        return await self.profiles.list(role=Role.CASHIER.value, created_by=viewer.id)

    async def list_accounts(
        self, viewer: Viewer, scope: AccountScope, query: ListingQuery
    ) -> Page:
        profiles = await self.list_scoped(viewer, scope)
        return apply_listing(profiles, query)

    # ── Creation ─────────────────────────────────────────────────
    async def create_account(
        self,
        viewer: Viewer,
        scope: AccountScope,
        fullname: str,
        email: str,
        password: str,
        role: Role = Role.CASHIER,
    ) -> Profile:
        """Create identity + profile for an account made by `viewer`."""
        self._check_scope(viewer, scope)
        if scope is AccountScope.OWN_CASHIERS:
            role = Role.CASHIER
        if not can_create(viewer.role, role):
            raise ForbiddenError(f"You cannot create {role.value} accounts")

        profile = await self._create(fullname, email, password, role, created_by=viewer.id)
        logger.info(f"{viewer.id} created {role.value} account {profile.id}")
        return profile

    async def register(self, fullname: str, email: str, password: str, role: Role) -> Profile:
        """Self sign-up: an account with no creator."""
        profile = await self._create(fullname, email, password, role, created_by=None)
        logger.info(f"Self-registered {role.value} account {profile.id}")
        return profile

    async def _create(
        self,
        fullname: str,
        email: str,
        password: str,
        role: Role,
        created_by: Optional[str],
    ) -> Profile:
        fullname = (fullname or "").strip()
        if not fullname or not (email or "").strip() or not (password or "").strip():
            raise ValidationError("All fields are required")

        identity = await self.identities.sign_up(
            email, password, metadata={"fullname": fullname}
        )
        profile = Profile(
            id=identity.id,
            fullname=fullname,
            role=role,
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
            is_active=True,
        )
        try:
            return await self.profiles.insert(profile)
        except Exception:
            logger.exception(f"Profile insert failed for identity {identity.id}")
            await self._discard_identity(identity.id)
            raise

    async def _discard_identity(self, identity_id: str) -> None:
        try:
            await self.identities.delete_user(identity_id)
            logger.info(f"Removed identity {identity_id} after failed profile insert")
        except Exception:
            logger.exception(f"Could not remove orphaned identity {identity_id}")

    # ── Mutation ─────────────────────────────────────────────────
    async def update_account(
        self,
        viewer: Viewer,
        scope: AccountScope,
        profile_id: str,
        fullname: Optional[str] = None,
        role: Optional[Role] = None,
    ) -> Profile:
        await self._get_in_scope(viewer, scope, profile_id)
        if role is not None and scope is not AccountScope.ALL:
            raise ForbiddenError("Only a superadmin can change roles")

        fields: dict = {}
        if fullname is not None:
            fullname = fullname.strip()
            if not fullname:
                raise ValidationError("Full name cannot be empty")
            fields["fullname"] = fullname
        if role is not None:
            fields["role"] = role.value
        if not fields:
            raise ValidationError("No valid fields to update")

        updated = await self.profiles.update(profile_id, fields)
        if updated is None:
            raise NotFoundError("Account not found")
        return updated

    async def toggle_active(
        self, viewer: Viewer, scope: AccountScope, profile_id: str
    ) -> Profile:
        """Flip is_active on one profile."""
        profile = await self._get_in_scope(viewer, scope, profile_id)
        if profile.id == viewer.id:
            raise ForbiddenError("You cannot deactivate your own account")

        updated = await self.profiles.update(profile_id, {"is_active": not profile.is_active})
        if updated is None:
            raise NotFoundError("Account not found")
        logger.info(f"{viewer.id} set is_active={updated.is_active} on {profile_id}")
        return updated

    async def delete_account(
        self, viewer: Viewer, scope: AccountScope, profile_id: str
    ) -> None:
        """
        Delete the identity behind a profile, then the profile itself.

        The profile goes last so a failed run leaves the account in scope and
        the delete can be retried.
        """
        await self._get_in_scope(viewer, scope, profile_id)
        if profile_id == viewer.id:
            raise ForbiddenError("You cannot delete your own account")

        if not await self.identities.delete_user(profile_id):
            logger.warning(f"No identity found for account {profile_id}")
        if not await self.profiles.delete(profile_id):
            raise NotFoundError("Account not found")
        logger.info(f"{viewer.id} deleted account {profile_id}")

    async def rename_self(self, viewer: Viewer, fullname: str) -> Profile:
        if viewer.profile is None:
            raise NotFoundError("Profile not found")
        fullname = fullname.strip()
        if not fullname:
            raise ValidationError("Full name cannot be empty")
        updated = await self.profiles.update(viewer.id, {"fullname": fullname})
        if updated is None:
            raise NotFoundError("Profile not found")
        return updated

    # ── Dashboard counters ───────────────────────────────────────
    async def role_counts(self) -> dict:
        """Profiles per role, queried one role at a time."""
        counts = {}
        for role in (Role.SUPERADMIN, Role.ADMIN, Role.CASHIER):
            counts[role.value] = await self.profiles.count(role=role.value)
        counts["TOTAL"] = sum(counts.values())
        return counts

    async def cashier_counts(self, viewer: Viewer) -> dict:
        total = await self.profiles.count(role=Role.CASHIER.value, created_by=viewer.id)
        active = await self.profiles.count(
            role=Role.CASHIER.value, created_by=viewer.id, is_active=True
        )
        return {"total": total, "active": active}
