"""Community discussion score with sentiment adjustment."""

from trend_engine.models.common import clamp
from trend_engine.models.model_metrics import NormalizedMetrics, TechDataPoints

# Sentiment blend between the two discussion sources
PRIMARY_SENTIMENT_WEIGHT = 0.6
SECONDARY_SENTIMENT_WEIGHT = 0.4

# Blended sentiment in [0, 1] maps to [-15, +15]
SENTIMENT_SCALE = 30


def compute_community_score(
    primary_mentions_pct: float = 0.0,
    primary_sentiment: float = 0.5,
    secondary_posts_pct: float = 0.0,
    articles_pct: float = 0.0,
    secondary_sentiment: float = 0.5,
    news_mentions_pct: float = 50.0,
) -> float:
    """Community score (0-100).

    Args:
        primary_mentions_pct: Percentile-ranked mentions on the primary forum (0-100)
        primary_sentiment: Primary forum sentiment, 0 to 1
        secondary_posts_pct: Percentile-ranked posts on the secondary forum (0-100)
        articles_pct: Percentile-ranked article count (0-100)
        secondary_sentiment: Secondary forum sentiment, 0 to 1
        news_mentions_pct: Percentile-ranked news feed mentions (0-100)
    """
    volume = (
        primary_mentions_pct * 0.30
        + secondary_posts_pct * 0.20
        + articles_pct * 0.20
        + news_mentions_pct * 0.15
    )
    blended = (
        primary_sentiment * PRIMARY_SENTIMENT_WEIGHT
        + secondary_sentiment * SECONDARY_SENTIMENT_WEIGHT
    )
    sentiment_adjustment = (clamp(blended, 0.0, 1.0) - 0.5) * SENTIMENT_SCALE
    return clamp(volume + sentiment_adjustment)


class CommunityEvaluator:
    """Scores discussion volume and tone. Present if any volume metric was reported."""

    dimension = "community"

    def evaluate(self, data: TechDataPoints, normalized: NormalizedMetrics) -> float | None:
        """Calculate the community score."""
        volumes = (data.hn_mentions, data.reddit_posts, data.devto_articles, data.rss_mentions)
        if all(v is None for v in volumes):
            return None

        return compute_community_score(
            normalized.hn_mentions,
            data.hn_sentiment if data.hn_sentiment is not None else 0.5,
            normalized.reddit_posts,
            normalized.devto_articles,
            data.reddit_sentiment if data.reddit_sentiment is not None else 0.5,
            normalized.rss_mentions,
        )
