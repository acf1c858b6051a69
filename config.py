import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

STORE_BACKENDS = ("memory", "file", "supabase")

@dataclass
class Config:
    supabase_url: str = os.getenv("SUPABASE_URL", "")
    supabase_key: str = os.getenv("SUPABASE_SERVICE_KEY", "")
    store_backend: str = os.getenv("BETTERFEEDS_STORE", "memory").lower()
    data_file: str = os.getenv("BETTERFEEDS_DATA_FILE", "data/tweets.json")
    min_training_examples: int = int(os.getenv("BETTERFEEDS_MIN_TRAINING_EXAMPLES", "10"))
    retrain_on_rating: bool = os.getenv("BETTERFEEDS_RETRAIN_ON_RATING", "true").lower() == "true"
    default_filter_enabled: bool = False
    default_filter_threshold: int = 50
    port: int = int(os.getenv("PORT", "3000"))

    def validate(self) -> bool:
        if self.store_backend not in STORE_BACKENDS:
            return False

        if self.min_training_examples < 1:
            return False

        required_fields = []
        if self.store_backend == "supabase":
            required_fields.extend([
                self.supabase_url,
                self.supabase_key,
            ])
        elif self.store_backend == "file":
            required_fields.append(self.data_file)

        return all(field for field in required_fields)
