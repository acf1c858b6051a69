from typing import Any, Dict, Optional
from _types import Tweet, TweetStore
from logger import get_logger
from services.decision_service import DecisionEngine
from services.ledger_service import InteractionLedger


class FeedFilterService:
    def __init__(self, store: TweetStore, engine: DecisionEngine, ledger: Optional[InteractionLedger] = None):
        self.store = store
        self.engine = engine
        self.ledger = ledger or InteractionLedger()
        self.logger = get_logger("feed")

    def observe(self, tweet: Tweet) -> Dict[str, Any]:
        """Handle one (possibly repeated) sighting of a tweet in the timeline"""
        state, created = self.ledger.observe(tweet.id)
        self.ledger.mark_pending(tweet.id)
        self.engine.ensure_trained()

        if tweet.rating is not None:
            result = self.engine.get_rating_or_prediction(tweet)
        else:
            result = self.engine.predict_tweet(tweet.id, tweet.content)
        self.ledger.record_prediction(tweet.id, result)

        # Settings are re-read for every decision
        settings = self.store.get_settings()
        hide = self.engine.should_hide(result, settings) and not state.is_hidden

        if hide:
            self.logger.debug(f"  Tweet {tweet.id} should be hidden (confidence {result['confidence']:.2f} > {settings['filter_threshold']}%)")

        return {
            "tweet_id": tweet.id,
            "created": created,
            "result": result,
            "hide": hide,
        }

    def mark_buttons(self, tweet_id: str) -> bool:
        return self.ledger.mark_buttons(tweet_id)

    def hide(self, tweet_id: str) -> bool:
        return self.ledger.mark_hidden(tweet_id)

    def show(self, tweet_id: str) -> bool:
        return self.ledger.mark_shown(tweet_id)

    def forget(self, tweet_id: str) -> bool:
        # The tweet has scrolled out of the timeline for good
        return self.ledger.forget(tweet_id)
