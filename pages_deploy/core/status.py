"""Helpers aggregating remote deployment signals into one status"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..constants import (
    DEPLOYMENT_STATE_ALIASES,
    SETTLED_STATES,
    SHORT_REVISION_LENGTH,
    STATE_BADGES,
    DeploymentState,
)
from ..models.remote import ChangeRecord, DeploymentEvent, DeploymentEventStatus
from ..models.result import RecentChange
from ..utils.formatting import short_revision

logger = logging.getLogger(__name__)


def parse_state(value: Optional[str]) -> DeploymentState:
    """Map a remote state string onto DeploymentState

    Unrecognised values become ``UNKNOWN``.
    """
    if not value:
        return DeploymentState.UNKNOWN

    normalized = value.strip().lower()
    if normalized in DEPLOYMENT_STATE_ALIASES:
        return DEPLOYMENT_STATE_ALIASES[normalized]

    try:
        return DeploymentState(normalized)
    except ValueError:
        logger.warning("Unrecognised deployment state %r, reporting unknown", value)
        return DeploymentState.UNKNOWN


def latest_event(events: Sequence[DeploymentEvent]) -> Optional[DeploymentEvent]:
    """Most recent deployment event (list order, index 0)"""
    return events[0] if events else None


def latest_state(statuses: Sequence[DeploymentEventStatus]) -> DeploymentState:
    """State of the most recent status (list order, index 0), else unknown"""
    if not statuses:
        return DeploymentState.UNKNOWN
    return parse_state(statuses[0].state)


def summarize_change(record: ChangeRecord) -> RecentChange:
    return RecentChange(
        short_revision=short_revision(record.revision, SHORT_REVISION_LENGTH),
        message=record.message,
        author=record.author,
        timestamp=record.timestamp,
        url=record.url,
    )


def trim_changes(records: Iterable[ChangeRecord], limit: int) -> List[RecentChange]:
    """Summarize at most ``limit`` change records, keeping their order"""
    changes = []
    for record in records:
        if len(changes) >= limit:
            break
        changes.append(summarize_change(record))
    return changes


def is_settled(state: DeploymentState) -> bool:
    """Whether a state is terminal for the deployment event"""
    return state in SETTLED_STATES


def badge_for(state: DeploymentState) -> Tuple[str, str]:
    """Label and colour shown for a state"""
    return STATE_BADGES[state]
