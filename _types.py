from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import TypedDict, Literal, Optional, Dict, Any, List, Protocol

Label = Literal["like", "dislike"]
Sentiment = Literal["Positive", "Negative", "Neutral"]

LIKE = 1
DISLIKE = -1


class Settings(TypedDict):
    filter_enabled: bool
    filter_threshold: int  # Range: 0 to 100 (percent confidence needed to hide)


class RatingStats(TypedDict):
    rated: int
    likes: int
    dislikes: int


class ModelPrediction(TypedDict):
    label: Optional[Label]
    confidence: float


class PredictionResult(TypedDict, total=False):
    label: Optional[Label]
    confidence: float
    is_user_rated: bool
    sentiment: Sentiment
    error: str


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, bool):
        raise ValueError(f"Unsupported timestamp: {value!r}")
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if isinstance(value, (int, float)):
        try:
            numeric = float(value)
            # Browser clients send epoch milliseconds
            if numeric > 10_000_000_000:
                numeric = numeric / 1000
            return datetime.fromtimestamp(numeric, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Timestamp out of range: {value!r}") from e
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    raise ValueError(f"Unsupported timestamp: {value!r}")


@dataclass(frozen=True)
class Tweet:
    """A single observed post, optionally carrying the user's rating."""
    id: str
    content: str = ""
    username: str = ""
    timestamp: Optional[datetime] = None  # None when the source gave no discovery time
    rating: Optional[int] = None  # 1 for like, -1 for dislike
    rated_at: Optional[datetime] = None

    @property
    def is_rated(self) -> bool:
        return self.rating is not None

    def with_rating(self, rating: int, rated_at: Optional[datetime] = None) -> 'Tweet':
        return replace(self, rating=rating, rated_at=rated_at or datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "content": self.content,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "rating": self.rating,
            "rated_at": self.rated_at.isoformat() if self.rated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Tweet':
        if not isinstance(data, dict):
            raise ValueError("Tweet payload must be an object")

        tweet_id = data.get("id")
        if not isinstance(tweet_id, str) or not tweet_id.strip():
            raise ValueError("Tweet payload is missing an 'id'")

        rating = data.get("rating")
        if rating is not None:
            if isinstance(rating, bool) or not isinstance(rating, (int, float)) or not float(rating).is_integer():
                raise ValueError(f"Invalid rating: {rating!r}")
            rating = int(rating)

        rated_at = data.get("rated_at", data.get("ratedAt"))

        return cls(
            id=tweet_id,
            content=str(data.get("content", data.get("text")) or ""),
            username=str(data.get("username", data.get("author")) or ""),
            timestamp=_parse_timestamp(data.get("timestamp")),
            rating=rating,
            rated_at=_parse_timestamp(rated_at),
        )


@dataclass
class InteractionState:
    """Per-tweet bookkeeping for what the feed layer has already done."""
    tweet_id: str
    first_seen: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    has_buttons: bool = False
    is_hidden: bool = False
    pending: bool = False
    prediction: Optional[Label] = None
    confidence: Optional[float] = None
    sentiment: Optional[Sentiment] = None
    is_user_rated: bool = False


class TweetStore(Protocol):
    def save_tweet(self, tweet: Tweet) -> None: ...

    def get_tweet(self, tweet_id: str) -> Optional[Tweet]: ...

    def get_rated_tweets(self) -> List[Tweet]: ...

    def get_settings(self) -> Settings: ...

    def update_settings(self, settings: Settings) -> None: ...
