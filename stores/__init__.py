from .local_store import LocalTweetsStore
from .tweets_store import TweetsStore

__all__ = ["LocalTweetsStore", "TweetsStore"]
