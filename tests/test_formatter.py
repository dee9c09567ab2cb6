from __future__ import annotations

from core.formatter import format_post_response, format_search_response, status_url
from core.models import PostedTweet, TweetMetrics, TweetRecord, TwitterUser


def _tweet(tweet_id: str, author_id: str = "1", likes: int = 0, retweets: int = 0) -> TweetRecord:
    return TweetRecord(
        id=tweet_id,
        text=f"tweet {tweet_id}",
        created_at="2024-01-01T00:00:00+00:00",
        author_id=author_id,
        metrics=TweetMetrics(likes=likes, retweets=retweets),
    )


def test_empty_results_say_so() -> None:
    text = format_search_response("nothing", [], [])
    assert 'Query: "nothing"' in text
    assert "Found 0 tweets" in text
    assert text.endswith("No tweets found matching your query.")


def test_one_block_per_tweet() -> None:
    tweets = [_tweet("10"), _tweet("11"), _tweet("12")]
    text = format_search_response("q", tweets, [TwitterUser(id="1", username="alice")])

    assert "Found 3 tweets" in text
    assert text.count("===") == 3
    assert [line for line in text.splitlines() if line.startswith("Tweet ")] == ["Tweet 1", "Tweet 2", "Tweet 3"]


def test_block_shows_author_metrics_and_url() -> None:
    text = format_search_response("q", [_tweet("99", likes=7, retweets=3)], [TwitterUser(id="1", username="alice")])

    assert "From: @alice" in text
    assert "Content: tweet 99" in text
    assert "- Likes: 7" in text
    assert "- Retweets: 3" in text
    assert "URL: https://twitter.com/alice/status/99" in text


def test_unresolvable_author_falls_back_to_unknown() -> None:
    text = format_search_response("q", [_tweet("5", author_id="404")], [])

    assert "From: @unknown" in text
    assert "URL: https://twitter.com/status/5" in text


def test_output_is_deterministic() -> None:
    tweets = [_tweet("1"), _tweet("2")]
    users = [TwitterUser(id="1", username="alice")]
    assert format_search_response("q", tweets, users) == format_search_response("q", tweets, users)


def test_post_response_contains_status_url() -> None:
    text = format_post_response(PostedTweet(id="123", text="hello"))
    assert text == "Tweet posted successfully!\nURL: https://twitter.com/status/123"
    assert status_url("123") in text
