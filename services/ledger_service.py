from typing import Dict, Optional, Tuple
from _types import InteractionState, PredictionResult
from logger import get_logger


class InteractionLedger:
    """Remembers every tweet the feed layer has already seen.

    The feed observer reports the same tweet many times; only the first
    sighting creates a record. Later sightings only refresh the prediction
    fields. has_buttons and is_hidden change through the explicit mark_*
    calls and nothing else.
    """

    def __init__(self):
        self.logger = get_logger("ledger")
        self._states: Dict[str, InteractionState] = {}

    def __contains__(self, tweet_id: str) -> bool:
        return tweet_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def get(self, tweet_id: str) -> Optional[InteractionState]:
        return self._states.get(tweet_id)

    def observe(self, tweet_id: str) -> Tuple[InteractionState, bool]:
        state = self._states.get(tweet_id)
        if state is not None:
            return state, False

        state = InteractionState(tweet_id=tweet_id)
        self._states[tweet_id] = state
        self.logger.debug(f"👀  Discovered tweet {tweet_id}")
        return state, True

    def mark_pending(self, tweet_id: str) -> None:
        state = self._states.get(tweet_id)
        if state is not None:
            state.pending = True

    def record_prediction(self, tweet_id: str, result: PredictionResult) -> Optional[InteractionState]:
        state = self._states.get(tweet_id)
        if state is None:
            self.logger.debug(f"Ignoring prediction for unknown tweet {tweet_id}")
            return None

        state.prediction = result.get('label')
        state.confidence = result.get('confidence')
        state.sentiment = result.get('sentiment')
        state.is_user_rated = bool(result.get('is_user_rated', False))
        state.pending = False
        return state

    def mark_buttons(self, tweet_id: str) -> bool:
        state = self._states.get(tweet_id)
        if state is None or state.has_buttons:
            return False

        state.has_buttons = True
        return True

    def mark_hidden(self, tweet_id: str) -> bool:
        state = self._states.get(tweet_id)
        if state is None or state.is_hidden:
            return False

        state.is_hidden = True
        self.logger.debug(f"🙈  Hid tweet {tweet_id}")
        return True

    def mark_shown(self, tweet_id: str) -> bool:
        state = self._states.get(tweet_id)
        if state is None or not state.is_hidden:
            return False

        state.is_hidden = False
        return True

    def forget(self, tweet_id: str) -> bool:
        # Only for tweets that are no longer observable
        return self._states.pop(tweet_id, None) is not None
