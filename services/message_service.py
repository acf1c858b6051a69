from dataclasses import dataclass
from typing import Any, Callable, Dict, Union
from _types import PredictionResult, Settings, Tweet, TweetStore
from config import Config
from logger import get_logger
from services.decision_service import DecisionEngine
from utils import default_settings, parse_settings, summarize_ratings


@dataclass(frozen=True)
class SaveRatingRequest:
    tweet: Tweet


@dataclass(frozen=True)
class PredictRequest:
    tweet_id: str
    content: str = ""


@dataclass(frozen=True)
class GetSettingsRequest:
    pass


@dataclass(frozen=True)
class UpdateSettingsRequest:
    settings: Settings


@dataclass(frozen=True)
class GetRatedTweetsRequest:
    pass


Request = Union[SaveRatingRequest, PredictRequest, GetSettingsRequest, UpdateSettingsRequest, GetRatedTweetsRequest]


def _parse_save_rating(message: Dict[str, Any]) -> SaveRatingRequest:
    tweet = Tweet.from_dict(message.get('data', message.get('tweet')))
    if tweet.rating is None:
        raise ValueError("saveRating needs a tweet with a rating")
    return SaveRatingRequest(tweet=tweet)


def _parse_predict(message: Dict[str, Any]) -> PredictRequest:
    tweet_id = message.get('tweet_id', message.get('tweetId'))
    if not isinstance(tweet_id, str) or not tweet_id:
        raise ValueError("predict needs a 'tweet_id'")

    content = message.get('content')
    if content is not None and not isinstance(content, str):
        raise ValueError("predict 'content' must be a string")

    return PredictRequest(tweet_id=tweet_id, content=content or "")


def _parse_update_settings(message: Dict[str, Any]) -> UpdateSettingsRequest:
    return UpdateSettingsRequest(settings=parse_settings(message.get('settings')))


MESSAGE_PARSERS: Dict[str, Callable[[Dict[str, Any]], Request]] = {
    'saveRating': _parse_save_rating,
    'predict': _parse_predict,
    'getSettings': lambda _: GetSettingsRequest(),
    'updateSettings': _parse_update_settings,
    'getRatedTweets': lambda _: GetRatedTweetsRequest(),
}

# Action names used by the browser extension
ACTION_ALIASES = {
    'saveTweetRating': 'saveRating',
    'getPrediction': 'predict',
}


def parse_message(message: Dict[str, Any]) -> Request:
    if not isinstance(message, dict):
        raise ValueError("Message must be an object")

    action = message.get('action')
    parser = MESSAGE_PARSERS.get(ACTION_ALIASES.get(action, action)) if isinstance(action, str) else None
    if parser is None:
        raise ValueError(f"Unknown action: {action!r}")

    return parser(message)


class MessageService:
    def __init__(self, config: Config, store: TweetStore, engine: DecisionEngine):
        self.config = config
        self.store = store
        self.engine = engine
        self.logger = get_logger("messages")

    def handle(self, request: Request) -> Dict[str, Any]:
        if isinstance(request, SaveRatingRequest):
            return self.save_rating(request.tweet)
        if isinstance(request, PredictRequest):
            return self.predict(request.tweet_id, request.content)
        if isinstance(request, GetSettingsRequest):
            return self.get_settings()
        if isinstance(request, UpdateSettingsRequest):
            return self.update_settings(request.settings)
        if isinstance(request, GetRatedTweetsRequest):
            return self.get_rated_tweets()

        raise TypeError(f"Unhandled request type: {type(request).__name__}")

    def save_rating(self, tweet: Tweet) -> Dict[str, Any]:
        try:
            self.engine.record_rating(tweet, tweet.rating)

            trained = self.engine.model.is_ready()
            if self.config.retrain_on_rating:
                trained = self.engine.retrain()

            return {"success": True, "trained": trained}

        except Exception as e:
            self.logger.error(f"❌  Error saving tweet rating: {e}")
            return {"success": False, "error": str(e)}

    def predict(self, tweet_id: str, content: str) -> PredictionResult:
        try:
            self.engine.ensure_trained()
            return self.engine.predict_tweet(tweet_id, content)

        except Exception as e:
            self.logger.error(f"❌  Error getting prediction for tweet {tweet_id}: {e}")
            return {"label": None, "confidence": 0.0, "error": str(e)}

    def get_settings(self) -> Dict[str, Any]:
        try:
            return dict(self.store.get_settings())

        except Exception as e:
            self.logger.error(f"❌  Error getting settings: {e}. Using default.")
            settings: Dict[str, Any] = dict(self._default_settings())
            settings["error"] = str(e)
            return settings

    def update_settings(self, settings: Settings) -> Dict[str, Any]:
        try:
            self.store.update_settings(parse_settings(dict(settings)))
            self.logger.info(f"⚙️  Updated settings: filter_enabled={settings['filter_enabled']}, threshold={settings['filter_threshold']}")
            return {"success": True}

        except Exception as e:
            self.logger.error(f"❌  Error updating settings: {e}")
            return {"success": False, "error": str(e)}

    def get_rated_tweets(self) -> Dict[str, Any]:
        try:
            tweets = self.store.get_rated_tweets()
            return {
                "tweets": [tweet.to_dict() for tweet in tweets],
                "stats": summarize_ratings(tweets),
            }

        except Exception as e:
            self.logger.error(f"❌  Error getting rated tweets: {e}")
            return {
                "tweets": [],
                "stats": summarize_ratings([]),
                "error": str(e),
            }

    def _default_settings(self) -> Settings:
        return default_settings(self.config.default_filter_enabled, self.config.default_filter_threshold)
