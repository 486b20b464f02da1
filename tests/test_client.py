"""Tests for the client collaborator."""

import json

import pytest
from httpx import ASGITransport

from shortlink.client import ClientError, RecentLink, RecentLinks, ShortLinkClient


def make_link(i):
    return RecentLink(
        short_id=f"id{i:06d}",
        original_url=f"https://example.com/{i}",
        short_url=f"http://localhost:8001/id{i:06d}",
        created_at=1700000000000 + i,
    )


class TestRecentLinks:
    """Test the client-local recent links list."""

    def test_newest_first(self):
        recent = RecentLinks()
        recent.add(make_link(1))
        recent.add(make_link(2))

        assert [link.short_id for link in recent] == ["id000002", "id000001"]

    def test_capped_at_ten_oldest_evicted(self):
        recent = RecentLinks()
        for i in range(15):
            recent.add(make_link(i))

        assert len(recent) == 10
        ids = [link.short_id for link in recent]
        assert ids[0] == "id000014"
        assert ids[-1] == "id000005"

    def test_persistence(self, tmp_path):
        path = str(tmp_path / "recent.json")
        recent = RecentLinks(path=path)
        for i in range(3):
            recent.add(make_link(i))

        reloaded = RecentLinks(path=path)

        assert list(reloaded) == list(recent)

    def test_corrupt_file_starts_fresh(self, tmp_path):
        path = tmp_path / "recent.json"
        path.write_text("{not json")

        recent = RecentLinks(path=str(path))

        assert len(recent) == 0

    def test_oversized_file_truncated(self, tmp_path):
        path = tmp_path / "recent.json"
        path.write_text(json.dumps([make_link(i).__dict__ for i in range(12)]))

        recent = RecentLinks(path=str(path))

        assert len(recent) == 10
        assert next(iter(recent)).short_id == "id000000"

    def test_clear(self, tmp_path):
        path = str(tmp_path / "recent.json")
        recent = RecentLinks(path=path)
        recent.add(make_link(1))

        recent.clear()

        assert len(RecentLinks(path=path)) == 0


@pytest.mark.asyncio
class TestShortLinkClient:
    """Test the HTTP client against the app in-process."""

    async def test_shorten_and_analytics(self, app):
        async with ShortLinkClient(base_url="http://testserver", transport=ASGITransport(app=app)) as client:
            short_id = await client.shorten("https://example.com/a/very/long/path")
            analytics = await client.analytics(short_id)

        assert len(short_id) == 8
        assert client.short_url(short_id) == f"http://testserver/{short_id}"
        assert analytics == {"totalClicks": 0, "analytics": []}

    async def test_error_raises(self, app):
        async with ShortLinkClient(base_url="http://testserver", transport=ASGITransport(app=app)) as client:
            with pytest.raises(ClientError) as exc_info:
                await client.analytics("zzzzzzzz")

        assert exc_info.value.status_code == 404

    async def test_validation_error_message(self, app):
        async with ShortLinkClient(base_url="http://testserver", transport=ASGITransport(app=app)) as client:
            with pytest.raises(ClientError) as exc_info:
                await client.shorten("")

        assert exc_info.value.status_code == 400
        assert "required" in exc_info.value.message
