import re
from typing import Any, Dict, Iterable, List, Optional
from _types import Settings, Sentiment, RatingStats, Tweet, LIKE, DISLIKE

STOPWORDS = frozenset([
    'a', 'an', 'the', 'and', 'or', 'but', 'is', 'are', 'was', 'were', 'in', 'to', 'of', 'for'
])

POSITIVE_WORDS = frozenset(['good', 'great', 'love', 'excellent', 'happy', 'amazing'])
NEGATIVE_WORDS = frozenset(['bad', 'terrible', 'hate', 'awful', 'sad', 'horrible'])

PUNCTUATION_PATTERN = re.compile(r'[^\w\s]')


def tokenize(text: Optional[str]) -> List[str]:
    if not text or not isinstance(text, str):
        return []

    cleaned = PUNCTUATION_PATTERN.sub('', text.lower())
    return [
        token for token in cleaned.split()
        if token not in STOPWORDS and len(token) > 1
    ]


def simple_sentiment(text: Optional[str]) -> Sentiment:
    """Crude lexicon polarity, used until enough tweets are rated to train"""
    if not text or not isinstance(text, str):
        return 'Neutral'

    positive_count = 0
    negative_count = 0

    # Deliberately cruder than tokenize(): punctuation stays attached
    for word in text.lower().split():
        if word in POSITIVE_WORDS:
            positive_count += 1
        if word in NEGATIVE_WORDS:
            negative_count += 1

    if positive_count > negative_count:
        return 'Positive'
    if negative_count > positive_count:
        return 'Negative'
    return 'Neutral'


def default_settings(filter_enabled: bool = False, filter_threshold: int = 50) -> Settings:
    return {
        'filter_enabled': filter_enabled,
        'filter_threshold': filter_threshold,
    }


def parse_settings(data: Dict[str, Any]) -> Settings:
    """Validate settings coming from a client (snake_case or camelCase keys)"""
    if not isinstance(data, dict):
        raise ValueError("Settings payload must be an object")

    enabled = data.get('filter_enabled', data.get('filterEnabled'))
    threshold = data.get('filter_threshold', data.get('filterThreshold'))

    if not isinstance(enabled, bool):
        raise ValueError(f"filter_enabled must be a boolean, got {enabled!r}")

    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)) or not float(threshold).is_integer():
        raise ValueError(f"filter_threshold must be an integer, got {threshold!r}")

    threshold = int(threshold)
    if threshold < 0 or threshold > 100:
        raise ValueError(f"filter_threshold must be between 0 and 100, got {threshold}")

    return {
        'filter_enabled': enabled,
        'filter_threshold': threshold,
    }


def summarize_ratings(tweets: Iterable[Tweet]) -> RatingStats:
    likes = 0
    dislikes = 0
    for tweet in tweets:
        if tweet.rating == LIKE:
            likes += 1
        elif tweet.rating == DISLIKE:
            dislikes += 1

    return {
        'rated': likes + dislikes,
        'likes': likes,
        'dislikes': dislikes,
    }
