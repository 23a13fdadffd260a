"""Tests for InMemoryRepository."""

import pytest

from pages_deploy.api.exceptions import ConflictError, RemoteNotFoundError
from pages_deploy.storage.memory import InMemoryRepository, blob_revision

AUTHOR = {"name": "SiteHub Editor", "email": "editor@sitehub.co.za"}


@pytest.fixture
def repo():
    return InMemoryRepository({"owner": "acme", "name": "customer-sites"})


def test_blob_revision_matches_git():
    # git hash-object of an empty file
    assert blob_revision(b"") == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"


@pytest.mark.asyncio
async def test_read_missing_file(repo):
    with pytest.raises(RemoteNotFoundError):
        await repo.read_file("sites/demo-site/index.html")


@pytest.mark.asyncio
async def test_create_then_read(repo):
    receipt = await repo.write_file("sites/a/index.html", b"hello", "create", AUTHOR)

    current = await repo.read_file("sites/a/index.html")

    assert current.revision == blob_revision(b"hello")
    assert receipt.url == f"https://github.com/acme/customer-sites/commit/{receipt.revision}"


@pytest.mark.asyncio
async def test_update_requires_revision(repo):
    await repo.write_file("sites/a/index.html", b"v1", "create", AUTHOR)

    with pytest.raises(ConflictError) as excinfo:
        await repo.write_file("sites/a/index.html", b"v2", "update", AUTHOR)

    assert excinfo.value.status_code == 422


@pytest.mark.asyncio
async def test_update_with_stale_revision_conflicts(repo):
    await repo.write_file("sites/a/index.html", b"v1", "create", AUTHOR)

    with pytest.raises(ConflictError) as excinfo:
        await repo.write_file("sites/a/index.html", b"v2", "update", AUTHOR, expected_revision="0" * 40)

    assert excinfo.value.status_code == 409
    assert repo.get_content("sites/a/index.html") == b"v1"


@pytest.mark.asyncio
async def test_revision_for_missing_file_conflicts(repo):
    with pytest.raises(ConflictError):
        await repo.write_file("sites/a/index.html", b"v1", "create", AUTHOR, expected_revision="abc")

    assert repo.commit_count == 0


@pytest.mark.asyncio
async def test_recent_changes_filter_by_folder(repo):
    await repo.write_file("sites/a/index.html", b"1", "a1", AUTHOR)
    await repo.write_file("sites/ab/index.html", b"1", "ab1", AUTHOR)
    await repo.write_file("sites/a/index.html", b"2", "a2", AUTHOR,
                          expected_revision=blob_revision(b"1"))

    changes = await repo.list_recent_changes("sites/a", 5)

    assert [c.message for c in changes] == ["a2", "a1"]
    assert changes[0].author == "SiteHub Editor"


@pytest.mark.asyncio
async def test_deployments_newest_first(repo):
    await repo.write_file("sites/a/index.html", b"1", "a1", AUTHOR)
    first = repo.record_deployment("github-pages")
    second = repo.record_deployment("github-pages")
    repo.record_deployment_status(second.id, "queued")
    repo.record_deployment_status(second.id, "success")

    events = await repo.list_deployment_events("github-pages", 5)
    statuses = await repo.list_deployment_event_statuses(second.id, 1)

    assert [e.id for e in events] == [second.id, first.id]
    assert [s.state for s in statuses] == ["success"]


def test_status_for_unknown_event(repo):
    with pytest.raises(KeyError):
        repo.record_deployment_status(999, "success")
