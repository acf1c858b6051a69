from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple
from _types import ModelPrediction, Tweet, LIKE
from logger import get_logger
from utils import tokenize

DEFAULT_MIN_TRAINING_EXAMPLES = 10


class PreferenceModel:
    """Bag-of-terms classifier built from the user's liked and disliked tweets.

    Term counts (not presence, not TF-IDF) are kept per label, so vocabulary
    that keeps showing up in a user's ratings weighs more. Every call to
    train() rebuilds both mappings from the full set of rated tweets.
    """

    def __init__(self, min_training_examples: int = DEFAULT_MIN_TRAINING_EXAMPLES):
        if min_training_examples < 1:
            raise ValueError("min_training_examples must be at least 1")

        self.min_training_examples = min_training_examples
        self.logger = get_logger("classifier")
        self._trained = False
        # (liked, disliked) swapped in as one snapshot so predict() never reads a half-built pair
        self._vocabulary: Tuple[Counter, Counter] = (Counter(), Counter())

    def train(self, tweets: Iterable[Tweet]) -> bool:
        rated_tweets = [tweet for tweet in tweets if tweet.rating is not None and tweet.content]

        if len(rated_tweets) < self.min_training_examples:
            self.logger.info(f"🤷  Not enough rated tweets to train classifier ({len(rated_tweets)}/{self.min_training_examples})")
            self._trained = False
            return False

        liked_words: Counter = Counter()
        disliked_words: Counter = Counter()

        for tweet in rated_tweets:
            word_counts = liked_words if tweet.rating == LIKE else disliked_words
            word_counts.update(tokenize(tweet.content))

        self._vocabulary = (liked_words, disliked_words)
        self._trained = True
        self.logger.info(f"🧠  Classifier trained on {len(rated_tweets)} rated tweets ({len(liked_words)} liked terms, {len(disliked_words)} disliked terms)")
        return True

    def predict(self, text: Optional[str]) -> ModelPrediction:
        if not self._trained:
            return {'label': None, 'confidence': 0.0}

        words = tokenize(text)
        if not words:
            return {'label': None, 'confidence': 0.0}

        liked_words, disliked_words = self._vocabulary

        like_score = 0
        dislike_score = 0
        for word in words:
            like_score += liked_words.get(word, 0)
            dislike_score += disliked_words.get(word, 0)

        total_score = like_score + dislike_score
        if total_score == 0:
            return {'label': None, 'confidence': 0.0}

        like_confidence = like_score / total_score
        dislike_confidence = dislike_score / total_score

        # Ties go to dislike
        if like_confidence > dislike_confidence:
            return {'label': 'like', 'confidence': like_confidence}
        return {'label': 'dislike', 'confidence': dislike_confidence}

    def is_ready(self) -> bool:
        return self._trained

    @property
    def liked_words(self) -> Dict[str, int]:
        return dict(self._vocabulary[0])

    @property
    def disliked_words(self) -> Dict[str, int]:
        return dict(self._vocabulary[1])

    def top_terms(self, limit: int = 10) -> Dict[str, List[Tuple[str, int]]]:
        liked_words, disliked_words = self._vocabulary
        return {
            'like': liked_words.most_common(limit),
            'dislike': disliked_words.most_common(limit),
        }
