from datetime import datetime, timezone
import pytest
from _types import Tweet
from config import Config
from services.classifier_service import PreferenceModel
from services.decision_service import DecisionEngine
from stores.local_store import LocalTweetsStore

LIKED_TEXTS = [
    "great coffee this morning",
    "what a great game",
    "great news everyone",
    "great thread on python",
    "such great weather",
    "great music tonight",
]

DISLIKED_TEXTS = [
    "bad take on politics",
    "bad traffic downtown",
    "another bad day",
    "bad service again",
]


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the postgrest query builder for the stores"""

    def __init__(self, rows):
        self.rows = rows
        self._filters = []
        self._negate = False
        self._upsert = None

    def select(self, *_columns):
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    @property
    def not_(self):
        self._negate = True
        return self

    def is_(self, column, value):
        negate = self._negate
        self._negate = False

        def check(row):
            matches = row.get(column) is None if value == 'null' else row.get(column) == value
            return not matches if negate else matches

        self._filters.append(check)
        return self

    def upsert(self, row):
        self._upsert = dict(row)
        return self

    def execute(self):
        if self._upsert is not None:
            self.rows[self._upsert['id']] = self._upsert
            return FakeResponse([dict(self._upsert)])
        return FakeResponse([dict(row) for row in self.rows.values() if all(f(row) for f in self._filters)])


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.fail = False

    def table(self, name):
        if self.fail:
            raise RuntimeError("supabase unavailable")
        return FakeQuery(self.tables.setdefault(name, {}))


class BrokenStore(LocalTweetsStore):
    """A store whose every call fails, like an unreachable backend"""

    def save_tweet(self, tweet):
        raise RuntimeError("store unavailable")

    def get_tweet(self, tweet_id):
        raise RuntimeError("store unavailable")

    def get_rated_tweets(self):
        raise RuntimeError("store unavailable")

    def get_settings(self):
        raise RuntimeError("store unavailable")

    def update_settings(self, settings):
        raise RuntimeError("store unavailable")


class FlakyStore(LocalTweetsStore):
    """A store whose rated-tweet reads fail until `failures` runs out"""

    def __init__(self, failures=1):
        super().__init__()
        self.failures = failures

    def get_rated_tweets(self):
        if self.failures > 0:
            self.failures -= 1
            raise RuntimeError("store unavailable")
        return super().get_rated_tweets()


@pytest.fixture
def make_tweet():
    counter = {"n": 0}

    def _make(content, rating=None, tweet_id=None, username="someone"):
        counter["n"] += 1
        return Tweet(
            id=tweet_id or f"tweet-{counter['n']}",
            content=content,
            username=username,
            timestamp=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
            rating=rating,
            rated_at=datetime(2024, 1, 1, 10, 5, tzinfo=timezone.utc) if rating is not None else None,
        )

    return _make


@pytest.fixture
def rated_tweets(make_tweet):
    liked = [make_tweet(text, rating=1) for text in LIKED_TEXTS]
    disliked = [make_tweet(text, rating=-1) for text in DISLIKED_TEXTS]
    return liked + disliked


@pytest.fixture
def store():
    return LocalTweetsStore()


@pytest.fixture
def trained_store(store, rated_tweets):
    for tweet in rated_tweets:
        store.save_tweet(tweet)
    return store


@pytest.fixture
def engine(store):
    return DecisionEngine(store, PreferenceModel(min_training_examples=10))


@pytest.fixture
def config():
    return Config(store_backend="memory", min_training_examples=10, retrain_on_rating=True)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def flaky_store():
    return FlakyStore()
