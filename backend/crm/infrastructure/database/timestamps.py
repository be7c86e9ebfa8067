"""Customer timestamp maintenance.

Before pending changes are written, every customer being inserted or
updated is stamped:

- inserts get ``created_date`` when it is still unset,
- inserts and updates always get a fresh ``modified_date``.

The maintainer only touches in-memory attributes of the selected entities.
It never queries the database and never raises; commit failures surface
from SQLAlchemy unchanged.

Usage:
    maintainer = TimestampMaintainer()
    install_timestamp_maintainer(CrmSession, maintainer)   # stamp on every flush
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from crm.infrastructure.database.models import CustomerModel

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Set on session.info when a data context has already stamped the pending
# changes; the next before_flush consumes it instead of stamping again.
_STAMPED_MARKER = "crm.timestamps.stamped"


def utc_now() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)


class ChangeState(str, Enum):
    """Pending operation recorded for a tracked entity."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class PendingChange:
    """A tracked entity paired with the operation about to be committed."""

    entity: Any
    state: ChangeState


def collect_pending_changes(session: Session) -> list[PendingChange]:
    """Snapshot the session's unit of work as (entity, state) pairs.

    ``session.dirty`` is taken as-is: an attribute set to its current value
    still counts as a modification.
    """
    changes = [PendingChange(obj, ChangeState.ADDED) for obj in session.new]
    changes.extend(PendingChange(obj, ChangeState.MODIFIED) for obj in session.dirty)
    changes.extend(PendingChange(obj, ChangeState.DELETED) for obj in session.deleted)
    return changes


class TimestampMaintainer:
    """Stamps ``created_date`` / ``modified_date`` on pending customers.

    Holds no mutable state besides the injected clock, so one instance can be
    shared by any number of sessions.
    """

    STAMPED_TYPES: tuple[type, ...] = (CustomerModel,)

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock

    def stamp(self, changes: Iterable[PendingChange]) -> int:
        """Stamp every added or modified customer. Returns how many were stamped."""
        stamped = 0
        for change in changes:
            if change.state not in (ChangeState.ADDED, ChangeState.MODIFIED):
                continue
            if not isinstance(change.entity, self.STAMPED_TYPES):
                continue

            now = self._clock()
            if change.state is ChangeState.ADDED and change.entity.created_date is None:
                change.entity.created_date = now
            change.entity.modified_date = now
            stamped += 1
        return stamped

    def stamp_session(self, session: Session) -> int:
        """Stamp the session's pending changes ahead of an explicit commit.

        Marks the session so the flush performed by that commit does not
        stamp a second time.
        """
        changes = collect_pending_changes(session)
        stamped = self.stamp(changes)
        if changes:
            session.info[_STAMPED_MARKER] = True
        return stamped

    @staticmethod
    def release(session: Session) -> None:
        """Drop the marker left by ``stamp_session`` if no flush consumed it."""
        session.info.pop(_STAMPED_MARKER, None)

    def before_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        """``SessionEvents.before_flush`` listener."""
        if session.info.pop(_STAMPED_MARKER, False):
            return
        stamped = self.stamp(collect_pending_changes(session))
        if stamped:
            logger.debug("Stamped timestamps on %d customer(s) before flush", stamped)


def install_timestamp_maintainer(
    target: type[Session] | Session,
    maintainer: TimestampMaintainer | None = None,
) -> TimestampMaintainer:
    """Register ``maintainer`` as a before_flush listener on a Session class or instance."""
    maintainer = maintainer or TimestampMaintainer()
    event.listen(target, "before_flush", maintainer.before_flush)
    return maintainer
