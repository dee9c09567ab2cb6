# =============================================================================
# core/formatter.py  —  Response Formatter
# =============================================================================
#
# Pure functions that turn Twitter results into the text the agent reads.
# Same input, same output: no clock, no I/O.
#
# A tweet whose author didn't come back in the expansion data is still
# rendered, credited to "unknown".
# =============================================================================

from typing import Iterable

from core.models import PostedTweet, TweetRecord, TwitterUser

TWITTER_BASE_URL = "https://twitter.com"
UNKNOWN_AUTHOR = "unknown"
NO_RESULTS = "No tweets found matching your query."


def status_url(tweet_id: str, username: str = "") -> str:
    if username and username != UNKNOWN_AUTHOR:
        return f"{TWITTER_BASE_URL}/{username}/status/{tweet_id}"
    return f"{TWITTER_BASE_URL}/status/{tweet_id}"


def format_post_response(tweet: PostedTweet) -> str:
    return f"Tweet posted successfully!\nURL: {status_url(tweet.id)}"


def _format_tweet(index: int, tweet: TweetRecord, username: str) -> str:
    return "\n".join([
        f"Tweet {index}",
        f"From: @{username}",
        f"Content: {tweet.text}",
        f"Posted: {tweet.created_at}",
        "",
        "Metrics:",
        f"- Likes: {tweet.metrics.likes}",
        f"- Retweets: {tweet.metrics.retweets}",
        "",
        f"URL: {status_url(tweet.id, username)}",
        "===",
    ])


def format_search_response(
    query: str,
    tweets: Iterable[TweetRecord],
    users: Iterable[TwitterUser],
) -> str:
    """Render search results as one text block per tweet under a header."""
    tweets = list(tweets)
    usernames = {user.id: user.username for user in users}

    header = "\n".join([
        "Twitter Search Results",
        f'Query: "{query}"',
        f"Found {len(tweets)} tweets",
        "",
        "",
    ])
    if not tweets:
        return header + NO_RESULTS

    blocks = [
        _format_tweet(index, tweet, usernames.get(tweet.author_id, UNKNOWN_AUTHOR))
        for index, tweet in enumerate(tweets, start=1)
    ]
    return header + "\n\n".join(blocks)
