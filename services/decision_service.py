import threading
from typing import Optional
from _types import PredictionResult, Settings, Tweet, TweetStore, LIKE, DISLIKE
from logger import get_logger
from services.classifier_service import PreferenceModel
from utils import simple_sentiment


class DecisionEngine:
    """Turns a tweet into a like/dislike prediction and a hide decision.

    The engine owns its PreferenceModel. Rated tweets are read from the store
    on every retrain and never cached in between.
    """

    def __init__(self, store: TweetStore, model: Optional[PreferenceModel] = None):
        self.store = store
        self.model = model or PreferenceModel()
        self.logger = get_logger("engine")
        self._train_lock = threading.Lock()
        self._needs_retrain = True

    @property
    def needs_retrain(self) -> bool:
        return self._needs_retrain

    def get_rating_or_prediction(self, tweet: Tweet) -> PredictionResult:
        # The user's own rating always wins over whatever the model says
        if tweet.rating is not None:
            return {
                'label': 'like' if tweet.rating > 0 else 'dislike',
                'confidence': 1.0,
                'is_user_rated': True,
            }

        if self.model.is_ready():
            prediction = self.model.predict(tweet.content)
            self.logger.debug(f"  Tweet {tweet.id}: label={prediction['label']}, confidence={prediction['confidence']:.3f}")
            return {
                'label': prediction['label'],
                'confidence': prediction['confidence'],
                'is_user_rated': False,
            }

        return {
            'label': None,
            'confidence': 0.0,
            'sentiment': simple_sentiment(tweet.content),
            'is_user_rated': False,
        }

    def predict_tweet(self, tweet_id: str, content: Optional[str]) -> PredictionResult:
        existing_tweet = self.store.get_tweet(tweet_id)
        if existing_tweet is not None and existing_tweet.rating is not None:
            return self.get_rating_or_prediction(existing_tweet)

        return self.get_rating_or_prediction(Tweet(id=tweet_id, content=content or ""))

    def should_hide(self, result: PredictionResult, settings: Settings) -> bool:
        if not settings.get('filter_enabled'):
            return False

        if result.get('label') != 'dislike':
            return False

        confidence = result.get('confidence')
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            return False

        return confidence > settings['filter_threshold'] / 100

    def record_rating(self, tweet: Tweet, rating: int) -> Tweet:
        if isinstance(rating, bool) or rating not in (LIKE, DISLIKE):
            raise ValueError(f"Rating must be {LIKE} or {DISLIKE}, got {rating!r}")

        rating = int(rating)
        rated_tweet = tweet.with_rating(rating)
        self.store.save_tweet(rated_tweet)
        self._needs_retrain = True

        self.logger.info(f"👍  Recorded rating {rating:+d} for tweet {tweet.id}")
        return rated_tweet

    def retrain(self) -> bool:
        with self._train_lock:
            # Cleared before the read so a rating saved mid-read re-dirties the corpus
            self._needs_retrain = False
            try:
                rated_tweets = self.store.get_rated_tweets()
                return self.model.train(rated_tweets)
            except Exception:
                self._needs_retrain = True
                raise

    def ensure_trained(self) -> bool:
        """Retrain if a rating was recorded since the last rebuild"""
        if self._needs_retrain:
            self.retrain()
        return self.model.is_ready()
