"""
Shared helpers for the SQLAlchemy repositories.
"""

import functools
import logging
import uuid

from sqlalchemy import and_, or_, select, false
from sqlalchemy.exc import OperationalError, InterfaceError
from sqlalchemy.orm import aliased

from timesheets.domain.models.base import TransientStoreError
from timesheets.domain.services.authorization_policy import EntryScope, ScopeKind
from timesheets.infrastructure.db.models import ProfileModel


logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


def translate_store_errors(func):
    """Surface connectivity failures as TransientStoreError so callers can retry by hand."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Database unavailable in {func.__qualname__}: {e}")
            raise TransientStoreError() from e

    return wrapper


def scope_filter(scope: EntryScope, org_column, owner_column):
    """
    SQL condition selecting the rows an EntryScope includes.
    Mirrors EntryScope.includes: org always, then self / direct reports / everyone.
    """
    if scope.kind == ScopeKind.NONE:
        return false()

    conditions = [org_column == scope.org_id]

    if scope.kind == ScopeKind.SELF:
        conditions.append(owner_column == scope.actor_id)
    elif scope.kind == ScopeKind.TEAM:
        # aliased so the subquery never correlates with an outer profiles query
        manager_link = aliased(ProfileModel)
        reports = select(manager_link.id).where(
            manager_link.org_id == scope.org_id,
            manager_link.manager_id == scope.actor_id,
        )
        conditions.append(or_(owner_column == scope.actor_id, owner_column.in_(reports)))

    return and_(*conditions)
