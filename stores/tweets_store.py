from logger import get_logger
from supabase import create_client, Client
from config import Config
from typing import List, Optional
from _types import Settings, Tweet
from utils import default_settings

SETTINGS_ROW_ID = 'default'


class TweetsStore:
    def __init__(self, config: Config, client: Optional[Client] = None):
        self.config = config
        self.logger = get_logger("store")

        self.supabase: Client = client or create_client(
            config.supabase_url,
            config.supabase_key
        )

        self.logger.info("✅  TweetsStore initialized")

    def save_tweet(self, tweet: Tweet) -> None:
        try:
            self.supabase.table('tweets').upsert(tweet.to_dict()).execute()
            self.logger.debug(f"Stored tweet with ID: {tweet.id}")

        except Exception as e:
            self.logger.error(f"❌  Failed to store tweet {tweet.id} in Supabase: {e}")
            raise

    def get_tweet(self, tweet_id: str) -> Optional[Tweet]:
        try:
            response = self.supabase.table('tweets').select('*').eq('id', tweet_id).execute()

        except Exception as e:
            self.logger.error(f"❌  Failed to get tweet {tweet_id} from Supabase: {e}")
            raise

        if response.data and len(response.data) > 0:
            return Tweet.from_dict(response.data[0])
        return None

    def get_rated_tweets(self) -> List[Tweet]:
        try:
            response = self.supabase.table('tweets').select('*').not_.is_('rating', 'null').execute()

        except Exception as e:
            self.logger.error(f"❌  Failed to get rated tweets from Supabase: {e}")
            raise

        return [Tweet.from_dict(row) for row in (response.data or [])]

    def get_settings(self) -> Settings:
        try:
            response = self.supabase.table('settings').select('*').eq('id', SETTINGS_ROW_ID).execute()

            if response.data and len(response.data) > 0:
                row = response.data[0]
                return {
                    'filter_enabled': bool(row['filter_enabled']),
                    'filter_threshold': int(row['filter_threshold']),
                }
            else:
                self.logger.warning("🤷  No settings found in Supabase. Using default.")
                return self._default_settings()

        except Exception as e:
            self.logger.error(f"❌  Failed to get settings from Supabase: {e}. Using default.")
            return self._default_settings()

    def update_settings(self, settings: Settings) -> None:
        try:
            self.supabase.table('settings').upsert({
                'id': SETTINGS_ROW_ID,
                'filter_enabled': settings['filter_enabled'],
                'filter_threshold': settings['filter_threshold'],
            }).execute()

        except Exception as e:
            self.logger.error(f"❌  Failed to save settings to Supabase: {e}")
            raise

    def _default_settings(self) -> Settings:
        return default_settings(self.config.default_filter_enabled, self.config.default_filter_threshold)
