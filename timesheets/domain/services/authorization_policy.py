"""
Authorization policy.
Every role/org/manager rule of the engine lives here. The API layer and the
repositories consume it; nothing else branches on roles.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, FrozenSet, Dict

from timesheets.domain.models.base import AuthorizationError
from timesheets.domain.models.profile import Actor, Profile, Role
from timesheets.domain.models.time_entry import TimeEntry


class ScopeKind(str, Enum):
    """How far an actor can see into the organization."""
    ORG = "org"
    TEAM = "team"
    SELF = "self"
    NONE = "none"


@dataclass(frozen=True)
class EntryScope:
    """
    Rows an actor may read.
    ORG: every row of the org. TEAM: the actor's own rows plus rows of
    profiles whose manager_id is the actor. SELF: own rows only.
    """

    org_id: str
    actor_id: str
    kind: ScopeKind

    def includes(self, org_id: str, owner_id: str, owner_manager_id: Optional[str]) -> bool:
        if self.kind == ScopeKind.NONE or org_id != self.org_id:
            return False
        if self.kind == ScopeKind.ORG:
            return True
        if owner_id == self.actor_id:
            return True
        return self.kind == ScopeKind.TEAM and owner_manager_id == self.actor_id

    def own_only(self) -> "EntryScope":
        """The same scope narrowed to the actor's own rows."""
        if self.kind == ScopeKind.NONE:
            return self
        return EntryScope(org_id=self.org_id, actor_id=self.actor_id, kind=ScopeKind.SELF)


SELF_EDITABLE_FIELDS: FrozenSet[str] = frozenset({"full_name", "phone", "address"})
ADMIN_EDITABLE_FIELDS: FrozenSet[str] = frozenset({
    "full_name", "phone", "address", "hourly_rate", "role", "manager_id", "is_active",
})
PROTECTED_FIELDS: FrozenSet[str] = frozenset({"id", "org_id"})


class AuthorizationPolicy:
    """Role-based access rules for the timesheet engine."""

    def visible_scope(self, actor: Actor) -> EntryScope:
        if not actor.is_active:
            kind = ScopeKind.NONE
        elif actor.role == Role.ADMIN:
            kind = ScopeKind.ORG
        elif actor.role == Role.MANAGER:
            kind = ScopeKind.TEAM
        else:
            kind = ScopeKind.SELF
        return EntryScope(org_id=actor.org_id, actor_id=actor.id, kind=kind)

    # Entries

    def can_view_entry(self, actor: Actor, entry: TimeEntry, owner: Optional[Profile]) -> bool:
        owner_manager_id = owner.manager_id if owner is not None else None
        return self.visible_scope(actor).includes(entry.org_id, entry.user_id, owner_manager_id)

    def can_edit_entry(self, actor: Actor, entry: TimeEntry) -> bool:
        """Owner, or an admin writing on the owner's behalf. Locking is checked by the entry."""
        if not actor.is_active or entry.org_id != actor.org_id:
            return False
        return entry.user_id == actor.id or actor.is_admin

    def can_delete_entry(self, actor: Actor, entry: TimeEntry) -> bool:
        return actor.is_active and actor.is_admin and entry.org_id == actor.org_id

    def can_approve(self, actor: Actor, target: Profile) -> bool:
        """Admins approve anyone in the org; managers only their direct reports."""
        if not actor.is_active or target.org_id != actor.org_id:
            return False
        if actor.is_admin:
            return True
        return actor.is_manager and target.manager_id == actor.id and target.id != actor.id

    # Profiles

    def can_view_profile(self, actor: Actor, target: Profile) -> bool:
        return self.visible_scope(actor).includes(target.org_id, target.id, target.manager_id)

    def can_edit_rate(self, actor: Actor, target: Profile) -> bool:
        """
        Admins set any rate in the org, managers set their direct reports' rates,
        and a user may set their own rate until onboarding is completed.
        """
        if not actor.is_active or target.org_id != actor.org_id:
            return False
        if actor.is_admin:
            return True
        if actor.is_manager and target.manager_id == actor.id:
            return True
        return target.id == actor.id and target.onboarding_completed_at is None

    def editable_profile_fields(self, actor: Actor, target: Profile) -> FrozenSet[str]:
        """Fields of ``target`` the actor may change."""
        if not actor.is_active or target.org_id != actor.org_id:
            return frozenset()

        if actor.is_admin:
            fields = set(ADMIN_EDITABLE_FIELDS)
            if target.role == Role.ADMIN:
                fields.discard("role")
            if target.role != Role.CONTRACTOR:
                fields.discard("manager_id")
            if target.id == actor.id:
                fields.discard("role")
                fields.discard("is_active")
            return frozenset(fields)

        fields = set()
        if target.id == actor.id:
            fields |= SELF_EDITABLE_FIELDS
        if self.can_edit_rate(actor, target):
            fields.add("hourly_rate")
        return frozenset(fields)

    def can_edit_profile(self, actor: Actor, target: Profile, fields=None) -> bool:
        """Whether the actor may change ``fields`` (or anything at all) on ``target``."""
        allowed = self.editable_profile_fields(actor, target)
        if fields is None:
            return bool(allowed)
        requested = set(fields)
        if requested & PROTECTED_FIELDS:
            return False
        return requested <= allowed

    # Organization administration

    def can_manage_projects(self, actor: Actor) -> bool:
        return actor.is_active and actor.is_admin

    def can_invite(self, actor: Actor) -> bool:
        return actor.is_active and actor.is_admin

    def can_view_team(self, actor: Actor) -> bool:
        return actor.is_active and actor.role in (Role.ADMIN, Role.MANAGER)

    def capabilities(self, actor: Actor) -> Dict[str, bool]:
        """Flags a client can use to show or hide affordances."""
        return {
            "can_approve": self.can_view_team(actor),
            "can_manage_projects": self.can_manage_projects(actor),
            "can_invite": self.can_invite(actor),
            "can_view_reports": actor.is_active,
            "can_view_team": self.can_view_team(actor),
            "can_delete_entries": actor.is_active and actor.is_admin,
        }

    # Guards

    def require(self, allowed: bool, message: Optional[str] = None) -> None:
        """Raise AuthorizationError unless ``allowed``."""
        if not allowed:
            raise AuthorizationError(message) if message else AuthorizationError()


_policy = AuthorizationPolicy()


def get_authorization_policy() -> AuthorizationPolicy:
    """Shared stateless policy instance."""
    return _policy
