"""Tests for deployment state helpers."""

import pytest

from pages_deploy.constants import DeploymentState
from pages_deploy.core.status import (
    badge_for,
    is_settled,
    latest_state,
    parse_state,
    trim_changes,
)
from pages_deploy.models import ChangeRecord, DeploymentEventStatus


@pytest.mark.parametrize("value, expected", [
    ("success", DeploymentState.SUCCESS),
    ("in_progress", DeploymentState.IN_PROGRESS),
    ("pending", DeploymentState.PENDING),
    ("queued", DeploymentState.PENDING),
    ("failure", DeploymentState.FAILURE),
    ("error", DeploymentState.ERROR),
    ("SUCCESS", DeploymentState.SUCCESS),
    ("inactive", DeploymentState.UNKNOWN),
    ("", DeploymentState.UNKNOWN),
    (None, DeploymentState.UNKNOWN),
])
def test_parse_state(value, expected):
    assert parse_state(value) == expected


def test_latest_state_uses_first_status():
    statuses = [DeploymentEventStatus(id=2, state="in_progress"), DeploymentEventStatus(id=1, state="success")]

    assert latest_state(statuses) == DeploymentState.IN_PROGRESS
    assert latest_state([]) == DeploymentState.UNKNOWN


def test_trim_changes_keeps_order_and_limit():
    records = [ChangeRecord(revision=f"{i:040d}", message=f"m{i}") for i in range(8)]

    changes = trim_changes(records, 5)

    assert [c.message for c in changes] == ["m0", "m1", "m2", "m3", "m4"]
    assert changes[0].short_revision == "0000000"


@pytest.mark.parametrize("state, settled", [
    (DeploymentState.SUCCESS, True),
    (DeploymentState.FAILURE, True),
    (DeploymentState.ERROR, True),
    (DeploymentState.PENDING, False),
    (DeploymentState.IN_PROGRESS, False),
    (DeploymentState.UNKNOWN, False),
])
def test_is_settled(state, settled):
    assert is_settled(state) is settled


def test_badges():
    assert badge_for(DeploymentState.SUCCESS)[0] == "Live"
    assert badge_for(DeploymentState.PENDING)[0] == "Deploying"
    assert badge_for(DeploymentState.IN_PROGRESS)[0] == "Deploying"
    assert badge_for(DeploymentState.ERROR)[0] == "Failed"
    assert badge_for(DeploymentState.UNKNOWN)[0] == "Unknown"
