"""Tests for DeploymentReconciler publish and status aggregation."""

from datetime import datetime, timezone

import pytest

from pages_deploy.api.exceptions import (
    ConflictError,
    RemoteAuthError,
    RemoteError,
    RemoteNotFoundError,
    UnconfiguredSiteError,
)
from pages_deploy.constants import DeploymentState, ProbeErrorPolicy
from pages_deploy.models import (
    ChangeRecord,
    CommitReceipt,
    DeploymentEvent,
    DeploymentEventStatus,
    FileRevision,
)
from pages_deploy.core import DeploymentReconciler, SiteRegistry
from pages_deploy.storage import StorageFactory

from .conftest import OTHER_SITE_ID, SITE_ID, make_config

INDEX_PATH = "sites/demo-site/index.html"


def _receipt(revision="c0ffee" * 6 + "abcd"):
    return CommitReceipt(revision=revision, url=f"https://github.com/acme/customer-sites/commit/{revision}")


class TestPublish:
    """Publishing pages through the reconciler."""

    @pytest.mark.asyncio
    async def test_unconfigured_site_makes_no_remote_calls(self, mock_reconciler, mock_repository):
        with pytest.raises(UnconfiguredSiteError):
            await mock_reconciler.publish("Z", "<h1>Hi</h1>")

        mock_repository.read_file.assert_not_called()
        mock_repository.write_file.assert_not_called()

    @pytest.mark.asyncio
    async def test_creates_missing_file(self, reconciler, repository):
        result = await reconciler.publish(SITE_ID, "<h1>Hi</h1>")

        assert result.success
        assert result.site_location == "demo-site"
        assert result.deployment_status == DeploymentState.PENDING
        assert result.site_url == "https://acme.github.io/customer-sites/sites/demo-site/"
        assert result.commit_url.endswith(result.commit_revision)
        assert repository.get_content(INDEX_PATH) == b"<h1>Hi</h1>"
        assert repository.commit_count == 1

    @pytest.mark.asyncio
    async def test_updates_existing_file(self, reconciler, repository):
        first = await reconciler.publish(SITE_ID, "<h1>One</h1>")
        second = await reconciler.publish(SITE_ID, "<h1>Two</h1>")

        assert first.success and second.success
        assert first.commit_revision != second.commit_revision
        assert repository.get_content(INDEX_PATH) == b"<h1>Two</h1>"
        assert repository.commit_count == 2

    @pytest.mark.asyncio
    async def test_republishing_same_content_creates_new_commit(self, reconciler, repository):
        await reconciler.publish(SITE_ID, "<p>same</p>")
        await reconciler.publish(SITE_ID, "<p>same</p>")

        assert repository.commit_count == 2
        assert repository.get_content(INDEX_PATH) == b"<p>same</p>"

    @pytest.mark.asyncio
    async def test_write_carries_probed_revision(self, mock_reconciler, mock_repository):
        mock_repository.read_file.return_value = FileRevision(path=INDEX_PATH, revision="abc123")
        mock_repository.write_file.return_value = _receipt()

        await mock_reconciler.publish(SITE_ID, "<h1>Hi</h1>")

        mock_repository.read_file.assert_awaited_once_with(INDEX_PATH)
        assert mock_repository.write_file.call_args.kwargs["expected_revision"] == "abc123"

    @pytest.mark.asyncio
    async def test_missing_file_writes_without_revision(self, mock_reconciler, mock_repository):
        mock_repository.read_file.side_effect = RemoteNotFoundError(INDEX_PATH)
        mock_repository.write_file.return_value = _receipt()

        result = await mock_reconciler.publish(SITE_ID, "<h1>Hi</h1>")

        assert result.success
        assert mock_repository.write_file.call_args.kwargs["expected_revision"] is None

    @pytest.mark.asyncio
    async def test_content_is_utf8_encoded(self, mock_reconciler, mock_repository):
        mock_repository.read_file.side_effect = RemoteNotFoundError(INDEX_PATH)
        mock_repository.write_file.return_value = _receipt()

        await mock_reconciler.publish(SITE_ID, "<p>Café ☕</p>")

        path, content = mock_repository.write_file.call_args.args[:2]
        assert path == INDEX_PATH
        assert content == "<p>Café ☕</p>".encode("utf-8")

    @pytest.mark.asyncio
    async def test_commit_identity_and_default_message(self, mock_reconciler, mock_repository):
        mock_repository.read_file.side_effect = RemoteNotFoundError(INDEX_PATH)
        mock_repository.write_file.return_value = _receipt()

        await mock_reconciler.publish(SITE_ID, "<h1>Hi</h1>", site_name="BuyKit")

        message, author = mock_repository.write_file.call_args.args[2:4]
        assert message.startswith("Update BuyKit via SiteHub Editor - ")
        assert message.endswith(" UTC")
        assert author == {"name": "SiteHub Editor", "email": "editor@sitehub.co.za"}

    @pytest.mark.asyncio
    async def test_default_message_falls_back_to_location(self, mock_reconciler, mock_repository):
        mock_repository.read_file.side_effect = RemoteNotFoundError(INDEX_PATH)
        mock_repository.write_file.return_value = _receipt()

        await mock_reconciler.publish(SITE_ID, "<h1>Hi</h1>")

        assert mock_repository.write_file.call_args.args[2].startswith("Update demo-site via ")

    @pytest.mark.asyncio
    async def test_custom_commit_message_is_used_verbatim(self, reconciler, repository):
        await reconciler.publish(SITE_ID, "<h1>Hi</h1>", commit_message="Spring sale banner")

        changes = await repository.list_recent_changes("sites/demo-site", 5)
        assert changes[0].message == "Spring sale banner"

    @pytest.mark.asyncio
    async def test_conflict_is_reported_without_retry(self, mock_reconciler, mock_repository):
        mock_repository.read_file.return_value = FileRevision(path=INDEX_PATH, revision="stale")
        mock_repository.write_file.side_effect = ConflictError(INDEX_PATH, "stale")

        with pytest.raises(ConflictError):
            await mock_reconciler.publish(SITE_ID, "<h1>Hi</h1>")

        assert mock_repository.read_file.await_count == 1
        assert mock_repository.write_file.await_count == 1

    @pytest.mark.asyncio
    async def test_probe_failure_propagates_by_default(self, mock_reconciler, mock_repository):
        mock_repository.read_file.side_effect = RemoteAuthError("bad credentials", status_code=401)

        with pytest.raises(RemoteAuthError):
            await mock_reconciler.publish(SITE_ID, "<h1>Hi</h1>")

        mock_repository.write_file.assert_not_called()

    @pytest.mark.asyncio
    async def test_lenient_probe_writes_without_revision(self, mock_reconciler, mock_repository, config):
        config.publish.probe_errors = ProbeErrorPolicy.LENIENT
        mock_repository.read_file.side_effect = RemoteError("timeout")
        mock_repository.write_file.return_value = _receipt()

        result = await mock_reconciler.publish(SITE_ID, "<h1>Hi</h1>")

        assert result.success
        assert mock_repository.write_file.call_args.kwargs["expected_revision"] is None

    @pytest.mark.asyncio
    async def test_concurrent_stale_writer_conflicts(self, reconciler, repository):
        await reconciler.publish(SITE_ID, "<h1>v1</h1>")
        stale = (await repository.read_file(INDEX_PATH)).revision
        await reconciler.publish(SITE_ID, "<h1>v2</h1>")

        with pytest.raises(ConflictError):
            await repository.write_file(INDEX_PATH, b"<h1>v3</h1>", "late", {"name": "x", "email": "y"},
                                        expected_revision=stale)

        assert repository.get_content(INDEX_PATH) == b"<h1>v2</h1>"


class TestGetStatus:
    """Aggregating repository history into a status view."""

    @pytest.mark.asyncio
    async def test_unconfigured_site_makes_no_remote_calls(self, mock_reconciler, mock_repository):
        with pytest.raises(UnconfiguredSiteError):
            await mock_reconciler.get_status("Z")

        mock_repository.list_recent_changes.assert_not_called()
        mock_repository.list_deployment_events.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_history_is_unknown(self, reconciler):
        view = await reconciler.get_status(SITE_ID)

        assert view.success
        assert view.deployment_status == DeploymentState.UNKNOWN
        assert view.recent_changes == []
        assert view.deployment_revision is None
        assert view.repo_url == "https://github.com/acme/customer-sites/tree/main/sites/demo-site"

    @pytest.mark.asyncio
    async def test_recent_changes_are_limited_and_newest_first(self, reconciler):
        for i in range(7):
            await reconciler.publish(SITE_ID, f"<p>{i}</p>", commit_message=f"edit {i}")

        view = await reconciler.get_status(SITE_ID)

        assert [c.message for c in view.recent_changes] == ["edit 6", "edit 5", "edit 4", "edit 3", "edit 2"]
        assert all(len(c.short_revision) == 7 for c in view.recent_changes)

    @pytest.mark.asyncio
    async def test_changes_of_other_sites_are_excluded(self, reconciler):
        await reconciler.publish(OTHER_SITE_ID, "<p>other</p>", commit_message="other edit")
        await reconciler.publish(SITE_ID, "<p>mine</p>", commit_message="my edit")

        view = await reconciler.get_status(SITE_ID)

        assert [c.message for c in view.recent_changes] == ["my edit"]

    @pytest.mark.asyncio
    async def test_latest_status_of_latest_event_wins(self, reconciler, repository):
        published = await reconciler.publish(SITE_ID, "<h1>Hi</h1>")
        event = repository.record_deployment("github-pages")
        repository.record_deployment_status(event.id, "in_progress")
        repository.record_deployment_status(event.id, "success")

        view = await reconciler.get_status(SITE_ID)

        assert view.deployment_status == DeploymentState.SUCCESS
        assert view.is_live
        assert view.deployment_revision == published.commit_revision

    @pytest.mark.asyncio
    async def test_event_without_statuses_is_unknown(self, reconciler, repository):
        await reconciler.publish(SITE_ID, "<h1>Hi</h1>")
        repository.record_deployment("github-pages")

        view = await reconciler.get_status(SITE_ID)

        assert view.deployment_status == DeploymentState.UNKNOWN

    @pytest.mark.asyncio
    async def test_other_environments_are_ignored(self, reconciler, repository):
        await reconciler.publish(SITE_ID, "<h1>Hi</h1>")
        event = repository.record_deployment("preview")
        repository.record_deployment_status(event.id, "failure")

        view = await reconciler.get_status(SITE_ID)

        assert view.deployment_status == DeploymentState.UNKNOWN

    @pytest.mark.asyncio
    async def test_only_first_event_and_status_are_used(self, mock_reconciler, mock_repository):
        mock_repository.list_recent_changes.return_value = [
            ChangeRecord(revision="a" * 40, message="latest", author="SiteHub Editor",
                         timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc)),
        ]
        mock_repository.list_deployment_events.return_value = [
            DeploymentEvent(id=10, environment="github-pages", revision="a" * 40),
            DeploymentEvent(id=9, environment="github-pages", revision="b" * 40),
        ]
        mock_repository.list_deployment_event_statuses.return_value = [
            DeploymentEventStatus(id=2, state="failure"),
            DeploymentEventStatus(id=1, state="success"),
        ]

        view = await mock_reconciler.get_status(SITE_ID)

        mock_repository.list_recent_changes.assert_awaited_once_with("sites/demo-site", 5)
        mock_repository.list_deployment_events.assert_awaited_once_with("github-pages", 1)
        mock_repository.list_deployment_event_statuses.assert_awaited_once_with(10, 1)
        assert view.deployment_status == DeploymentState.FAILURE
        assert view.deployment_revision == "a" * 40
        assert view.recent_changes[0].short_revision == "aaaaaaa"

    @pytest.mark.asyncio
    async def test_no_status_lookup_without_event(self, mock_reconciler, mock_repository):
        mock_repository.list_recent_changes.return_value = []
        mock_repository.list_deployment_events.return_value = []

        view = await mock_reconciler.get_status(SITE_ID)

        assert view.deployment_status == DeploymentState.UNKNOWN
        mock_repository.list_deployment_event_statuses.assert_not_called()

    @pytest.mark.asyncio
    async def test_remote_failure_propagates(self, mock_reconciler, mock_repository):
        mock_repository.list_recent_changes.return_value = []
        mock_repository.list_deployment_events.side_effect = RemoteError("boom", status_code=500)

        with pytest.raises(RemoteError):
            await mock_reconciler.get_status(SITE_ID)

    @pytest.mark.asyncio
    async def test_configured_environment_is_queried(self, mock_reconciler, mock_repository, config):
        config.repository.environment = "pages"
        mock_repository.list_recent_changes.return_value = []
        mock_repository.list_deployment_events.return_value = []

        await mock_reconciler.get_status(SITE_ID)

        mock_repository.list_deployment_events.assert_awaited_once_with("pages", 1)


@pytest.mark.asyncio
async def test_end_to_end_publish_then_status():
    config = make_config()
    config.sites = {"A": "demo-site"}
    repository = StorageFactory.create_from_config(config.repository)
    reconciler = DeploymentReconciler(SiteRegistry.from_config(config), repository, config)

    published = await reconciler.publish("A", "<h1>Hello</h1>")
    view = await reconciler.get_status("A")

    assert published.deployment_status == DeploymentState.PENDING
    assert published.site_url.endswith("/sites/demo-site/")
    assert view.deployment_status == DeploymentState.UNKNOWN
    assert len(view.recent_changes) == 1
    assert view.recent_changes[0].short_revision == published.commit_revision[:7]
