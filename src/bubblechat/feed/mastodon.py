"""Mastodon public feed fetcher.

Looks an account up on its home instance and renders its recent posts as
plain text suitable for a chat bubble. Only public, unauthenticated API
endpoints are used.
"""

import re
from datetime import datetime, timezone

import httpx
from pydantic import BaseModel, Field


class FeedError(Exception):
    """Raised when a handle is malformed or the instance refuses a lookup."""


class RebloggedAccount(BaseModel):
    display_name: str = ""
    acct: str


class Reblog(BaseModel):
    content: str
    account: RebloggedAccount


class Status(BaseModel):
    id: str
    created_at: datetime
    content: str
    reblogs_count: int = 0
    favourites_count: int = 0
    replies_count: int = 0
    reblog: Reblog | None = None


class Account(BaseModel):
    id: str
    display_name: str = ""
    acct: str
    note: str = ""
    followers_count: int = 0
    following_count: int = 0
    statuses_count: int = 0


_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}


def strip_html(html: str) -> str:
    """Reduce Mastodon's HTML to plain text, keeping line and paragraph breaks."""
    text = re.sub(r"<br\s*/?>", "\n", html, flags=re.IGNORECASE)
    text = re.sub(r"</p>\s*<p>", "\n\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", "", text)
    for entity, char in _ENTITIES.items():
        text = text.replace(entity, char)
    return text


def parse_handle(raw: str) -> tuple[str, str]:
    """Split `@user@instance` (leading @ optional) into (user, domain)."""
    handle = raw.removeprefix("@")
    user, sep, domain = handle.partition("@")
    if not sep or not user or not domain:
        raise FeedError(f'invalid handle "{raw}": need user@instance')
    return user, domain


def relative_time(created_at: datetime, now: datetime | None = None) -> str:
    """Age of a post as `5m ago`, `3h ago` or `2d ago`."""
    now = now or datetime.now(timezone.utc)
    minutes = int((now - created_at).total_seconds() // 60)
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def format_post(status: Status, now: datetime | None = None) -> str:
    """One-line rendering of a status with boost prefix, stats and age."""
    boost = status.reblog
    body = strip_html(boost.content if boost else status.content).strip()
    prefix = f"[boosted @{boost.account.acct}] " if boost else ""

    stats = ", ".join(
        part for part in (
            status.reblogs_count and f"{status.reblogs_count} boosts",
            status.favourites_count and f"{status.favourites_count} favs",
            status.replies_count and f"{status.replies_count} replies",
        ) if part
    )
    suffix = f"  ({stats})" if stats else ""
    return f"{prefix}{body}{suffix}  - {relative_time(status.created_at, now)}"


def format_header(account: Account, user: str, domain: str) -> str:
    bio = strip_html(account.note).strip()
    parts = [
        f"@{user}@{domain}",
        f"({account.display_name})" if account.display_name else "",
        f"- {bio}" if bio else "",
        f"{account.followers_count} followers · {account.statuses_count} posts",
    ]
    return " ".join(part for part in parts if part)


async def get_mastodon_feed(
    handle: str,
    limit: int = 10,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Fetch an account's recent original posts as text.

    Args:
        handle: `user@instance`, optionally with a leading @
        limit: Maximum number of posts
        client: Optional shared HTTP client (a short-lived one is made otherwise)

    Returns:
        Header line, blank line, then numbered posts

    Raises:
        FeedError: Malformed handle, unknown account, failed request or
            unreadable response
    """
    user, domain = parse_handle(handle)
    base = f"https://{domain}"

    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=10.0)
    try:
        lookup = await http.get(f"{base}/api/v1/accounts/lookup", params={"acct": user})
        if lookup.status_code != 200:
            raise FeedError(f"couldn't find @{user} on {domain} ({lookup.status_code})")
        account = Account.model_validate(lookup.json())

        response = await http.get(
            f"{base}/api/v1/accounts/{account.id}/statuses",
            params={"limit": limit, "exclude_replies": "true"},
        )
        if response.status_code != 200:
            raise FeedError(f"failed to fetch statuses ({response.status_code})")
        statuses = [Status.model_validate(item) for item in response.json()]
    except httpx.HTTPError as e:
        raise FeedError(f"request to {domain} failed: {e}") from e
    except ValueError as e:
        # Malformed JSON or a payload that does not fit the models
        raise FeedError(f"unexpected response from {domain}: {e}") from e
    finally:
        if owns_client:
            await http.aclose()

    if not statuses:
        return f"@{user}@{domain} has no recent posts."

    posts = "\n".join(f"{i}. {format_post(status)}" for i, status in enumerate(statuses, 1))
    return f"{format_header(account, user, domain)}\n\n{posts}"
