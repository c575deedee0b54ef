"""Social feed fetchers usable from chat commands."""

from .mastodon import FeedError, get_mastodon_feed, parse_handle, strip_html

__all__ = ["FeedError", "get_mastodon_feed", "parse_handle", "strip_html"]
