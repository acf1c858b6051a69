#!/usr/bin/env python3
"""
Script to train a preference model from an exported list of rated tweets
and show what it learned
"""

import argparse
import json
from config import Config
from services.classifier_service import PreferenceModel
from _types import Tweet
from utils import summarize_ratings

def train_from_export(export_path: str, samples: list, top: int = 10) -> PreferenceModel:
    """Train a model from a JSON export (a list of tweets, or {"tweets": [...]})"""

    print(f"🔧 Training preference model from '{export_path}'...")

    with open(export_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    rows = data.get('tweets', []) if isinstance(data, dict) else data
    tweets = [Tweet.from_dict(row) for row in rows]
    stats = summarize_ratings(tweets)
    print(f"📊 {stats['rated']} rated tweets ({stats['likes']} liked, {stats['dislikes']} disliked)")

    config = Config()
    model = PreferenceModel(config.min_training_examples)

    if not model.train(tweets):
        print(f"🤷 Not enough rated tweets, need at least {config.min_training_examples}")
        return model

    print("✅ Model trained")
    for label, terms in model.top_terms(top).items():
        print(f"  Top {label} terms:")
        for term, count in terms:
            print(f"    - {term}: {count}")

    for text in samples:
        prediction = model.predict(text)
        print(f"  '{text}': {prediction['label']} ({prediction['confidence']:.2f})")

    return model

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("export_path", help="JSON file with rated tweets")
    parser.add_argument("--predict", action="append", default=[], help="Text to predict after training (repeatable)")
    parser.add_argument("--top", type=int, default=10, help="Number of top terms to show per label")
    args = parser.parse_args()

    train_from_export(args.export_path, args.predict, args.top)
