import json
import os
from typing import Dict, List, Optional
from _types import Settings, Tweet
from logger import get_logger
from utils import default_settings, parse_settings


class LocalTweetsStore:
    """In-process store, optionally mirrored to a JSON file after every write"""

    def __init__(self, file_path: Optional[str] = None):
        self.logger = get_logger("store")
        self.file_path = file_path
        self.tweets: Dict[str, Tweet] = {}
        self.settings: Settings = default_settings()

        if self.file_path:
            self._load()

        self.logger.info(f"✅  LocalTweetsStore initialized ({self.file_path or 'memory only'})")

    def save_tweet(self, tweet: Tweet) -> None:
        self.tweets[tweet.id] = tweet
        self._save()

    def get_tweet(self, tweet_id: str) -> Optional[Tweet]:
        return self.tweets.get(tweet_id)

    def get_rated_tweets(self) -> List[Tweet]:
        return [tweet for tweet in self.tweets.values() if tweet.rating is not None]

    def get_settings(self) -> Settings:
        return dict(self.settings)

    def update_settings(self, settings: Settings) -> None:
        self.settings = {
            'filter_enabled': settings['filter_enabled'],
            'filter_threshold': settings['filter_threshold'],
        }
        self._save()

    def _load(self) -> None:
        if not os.path.exists(self.file_path):
            return

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError:
            self.logger.warning(f"❌  {self.file_path} is not valid JSON, starting empty.")
            return

        if not isinstance(data, dict):
            self.logger.warning(f"❌  {self.file_path} does not hold a JSON object, starting empty.")
            return

        for row in data.get('tweets', []):
            try:
                tweet = Tweet.from_dict(row)
            except ValueError as e:
                self.logger.warning(f"🤷  Skipping stored tweet: {e}")
                continue
            self.tweets[tweet.id] = tweet

        if 'settings' in data:
            try:
                self.settings = parse_settings(data['settings'])
            except ValueError as e:
                self.logger.warning(f"🤷  Stored settings are invalid ({e}). Using default.")

        self.logger.info(f"📁  Loaded {len(self.tweets)} tweets from {self.file_path}")

    def _save(self) -> None:
        if not self.file_path:
            return

        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        data = {
            'tweets': [tweet.to_dict() for tweet in self.tweets.values()],
            'settings': self.settings,
        }

        try:
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            self.logger.error(f"❌  Failed to save tweets to {self.file_path}: {e}")
            raise
