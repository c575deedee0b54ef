"""Unit tests for the Mastodon feed fetcher."""
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from bubblechat.feed import FeedError, get_mastodon_feed, parse_handle, strip_html
from bubblechat.feed.mastodon import Status, format_post, relative_time

NOW = datetime(2024, 5, 17, 12, 0, tzinfo=timezone.utc)

ACCOUNT = {
    "id": "42",
    "display_name": "Ada",
    "acct": "ada",
    "note": "<p>Counting engines</p>",
    "followers_count": 10,
    "following_count": 3,
    "statuses_count": 99,
}

STATUSES = [
    {
        "id": "1",
        "created_at": "2024-05-17T11:55:00Z",
        "content": "<p>First &amp; foremost</p>",
        "reblogs_count": 2,
        "favourites_count": 0,
        "replies_count": 1,
    },
    {
        "id": "2",
        "created_at": "2024-05-16T12:00:00Z",
        "content": "",
        "reblog": {
            "content": "<p>shared post</p>",
            "account": {"display_name": "Bob", "acct": "bob@example.social"},
        },
    },
]


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestParseHandle:
    """Tests for parse_handle."""

    @pytest.mark.parametrize("raw", ["ada@mastodon.social", "@ada@mastodon.social"])
    def test_valid_handles(self, raw: str):
        assert parse_handle(raw) == ("ada", "mastodon.social")

    @pytest.mark.parametrize("raw", ["ada", "@ada", "ada@", "@mastodon.social", ""])
    def test_invalid_handles(self, raw: str):
        with pytest.raises(FeedError, match="invalid handle"):
            parse_handle(raw)


class TestFormatting:
    """Tests for HTML stripping and post formatting."""

    def test_strip_html_keeps_breaks(self):
        html = "<p>one<br>two</p><p>three &lt;3</p>"
        assert strip_html(html) == "one\ntwo\n\nthree <3"

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(minutes=5), "5m ago"),
            (timedelta(hours=3, minutes=10), "3h ago"),
            (timedelta(days=2, hours=1), "2d ago"),
        ],
    )
    def test_relative_time(self, delta: timedelta, expected: str):
        assert relative_time(NOW - delta, NOW) == expected

    def test_format_post_with_stats(self):
        status = Status.model_validate(STATUSES[0])
        assert format_post(status, NOW) == "First & foremost  (2 boosts, 1 replies)  - 5m ago"

    def test_format_boost(self):
        status = Status.model_validate(STATUSES[1])
        assert format_post(status, NOW) == "[boosted @bob@example.social] shared post  - 1d ago"


class TestGetMastodonFeed:
    """Tests for get_mastodon_feed with a mocked instance."""

    @pytest.mark.asyncio
    async def test_fetches_account_then_statuses(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            if request.url.path == "/api/v1/accounts/lookup":
                return httpx.Response(200, json=ACCOUNT)
            return httpx.Response(200, json=STATUSES)

        async with mock_client(handler) as client:
            text = await get_mastodon_feed("@ada@mastodon.social", limit=2, client=client)

        assert seen[0].params["acct"] == "ada"
        assert seen[1].path == "/api/v1/accounts/42/statuses"
        assert seen[1].params["limit"] == "2"
        assert seen[1].params["exclude_replies"] == "true"

        header, blank, *posts = text.split("\n")
        assert header.startswith("@ada@mastodon.social (Ada) - Counting engines")
        assert blank == ""
        assert posts[0].startswith("1. First & foremost")
        assert posts[1].startswith("2. [boosted @bob@example.social] shared post")

    @pytest.mark.asyncio
    async def test_unknown_account(self):
        async with mock_client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(FeedError, match="couldn't find @ghost"):
                await get_mastodon_feed("ghost@mastodon.social", client=client)

    @pytest.mark.asyncio
    async def test_status_fetch_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("lookup"):
                return httpx.Response(200, json=ACCOUNT)
            return httpx.Response(500)

        async with mock_client(handler) as client:
            with pytest.raises(FeedError, match="failed to fetch statuses"):
                await get_mastodon_feed("ada@mastodon.social", client=client)

    @pytest.mark.asyncio
    async def test_no_posts(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("lookup"):
                return httpx.Response(200, json=ACCOUNT)
            return httpx.Response(200, json=[])

        async with mock_client(handler) as client:
            text = await get_mastodon_feed("ada@mastodon.social", client=client)
        assert text == "@ada@mastodon.social has no recent posts."

    @pytest.mark.asyncio
    async def test_shared_client_left_open(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("lookup"):
                return httpx.Response(200, json=ACCOUNT)
            return httpx.Response(200, json=[])

        client = mock_client(handler)
        await get_mastodon_feed("ada@mastodon.social", client=client)
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_connection_failure_becomes_feed_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("dns failure", request=request)

        async with mock_client(handler) as client:
            with pytest.raises(FeedError, match="request to example.invalid failed") as info:
                await get_mastodon_feed("ada@example.invalid", client=client)
        assert isinstance(info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_malformed_body_becomes_feed_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>maintenance</html>")

        async with mock_client(handler) as client:
            with pytest.raises(FeedError, match="unexpected response"):
                await get_mastodon_feed("ada@mastodon.social", client=client)

    @pytest.mark.asyncio
    async def test_unexpected_payload_shape(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": "42"})

        async with mock_client(handler) as client:
            with pytest.raises(FeedError, match="unexpected response"):
                await get_mastodon_feed("ada@mastodon.social", client=client)
