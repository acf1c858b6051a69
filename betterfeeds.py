from config import Config
from logger import get_logger
from flask import Flask, jsonify, request, Response
import os
from services import DecisionEngine, FeedFilterService, InteractionLedger, MessageService, PreferenceModel, parse_message
from services.message_service import (
    GetRatedTweetsRequest,
    GetSettingsRequest,
    Request,
    SaveRatingRequest,
    UpdateSettingsRequest,
)
from stores import LocalTweetsStore, TweetsStore
from _types import Tweet, TweetStore
from utils import parse_settings
from typing import Optional, Tuple, Union


def build_store(config: Config) -> TweetStore:
    if config.store_backend == "supabase":
        return TweetsStore(config)
    if config.store_backend == "file":
        return LocalTweetsStore(config.data_file)
    return LocalTweetsStore()


def create_app(config: Optional[Config] = None, store: Optional[TweetStore] = None) -> Flask:
    config = config or Config()
    logger = get_logger()

    if not config.validate():
        raise ValueError("Invalid configuration, check the BETTERFEEDS_* and SUPABASE_* environment variables")

    store = store or build_store(config)
    engine = DecisionEngine(store, PreferenceModel(config.min_training_examples))
    message_service = MessageService(config, store, engine)
    feed_filter = FeedFilterService(store, engine, InteractionLedger())

    # Pick up whatever was rated before this process started
    try:
        engine.retrain()
    except Exception as e:
        logger.error(f"❌  Initial training failed: {e}. Starting untrained.")

    app = Flask(__name__)
    app.config["BETTERFEEDS_ENGINE"] = engine
    app.config["BETTERFEEDS_FEED_FILTER"] = feed_filter

    def bad_request(e: Exception) -> Tuple[Response, int]:
        return jsonify({"status": "error", "message": str(e)}), 400

    def respond(message_request: Request) -> Response:
        return jsonify(message_service.handle(message_request))

    @app.route('/')
    def health_check() -> Response:
        return jsonify({"status": "healthy", "message": "Better Feeds is running", "trained": engine.model.is_ready()})

    @app.route('/message', methods=['POST'])
    def handle_message() -> Union[Response, Tuple[Response, int]]:
        try:
            message_request = parse_message(request.get_json(silent=True))
        except ValueError as e:
            logger.warning(f"⚠️  Rejected message: {e}")
            return bad_request(e)

        return respond(message_request)

    @app.route('/ratings', methods=['POST'])
    def save_rating() -> Union[Response, Tuple[Response, int]]:
        try:
            tweet = Tweet.from_dict(request.get_json(silent=True))
            if tweet.rating is None:
                raise ValueError("Tweet has no rating")
        except ValueError as e:
            return bad_request(e)

        return respond(SaveRatingRequest(tweet=tweet))

    @app.route('/ratings', methods=['GET'])
    def get_rated_tweets() -> Response:
        return respond(GetRatedTweetsRequest())

    @app.route('/predictions', methods=['POST'])
    def predict() -> Union[Response, Tuple[Response, int]]:
        try:
            message_request = parse_message({**(request.get_json(silent=True) or {}), "action": "predict"})
        except (TypeError, ValueError) as e:
            return bad_request(e)

        return respond(message_request)

    @app.route('/settings', methods=['GET'])
    def get_settings() -> Response:
        return respond(GetSettingsRequest())

    @app.route('/settings', methods=['PUT'])
    def update_settings() -> Union[Response, Tuple[Response, int]]:
        try:
            settings = parse_settings(request.get_json(silent=True))
        except ValueError as e:
            return bad_request(e)

        return respond(UpdateSettingsRequest(settings=settings))

    @app.route('/tweets/observe', methods=['POST'])
    def observe_tweet() -> Union[Response, Tuple[Response, int]]:
        try:
            tweet = Tweet.from_dict(request.get_json(silent=True))
        except ValueError as e:
            return bad_request(e)

        try:
            return jsonify(feed_filter.observe(tweet))
        except Exception as e:
            logger.error(f"❌  Error observing tweet {tweet.id}: {e}")
            # Default to showing the tweet
            return jsonify({
                "tweet_id": tweet.id,
                "created": False,
                "result": {"label": None, "confidence": 0.0},
                "hide": False,
                "error": str(e),
            })

    @app.route('/tweets/<tweet_id>/buttons', methods=['POST'])
    def mark_buttons(tweet_id: str) -> Response:
        return jsonify({"success": feed_filter.mark_buttons(tweet_id)})

    @app.route('/tweets/<tweet_id>/hide', methods=['POST'])
    def hide_tweet(tweet_id: str) -> Response:
        return jsonify({"success": feed_filter.hide(tweet_id)})

    @app.route('/tweets/<tweet_id>/show', methods=['POST'])
    def show_tweet(tweet_id: str) -> Response:
        return jsonify({"success": feed_filter.show(tweet_id)})

    @app.route('/tweets/<tweet_id>', methods=['DELETE'])
    def forget_tweet(tweet_id: str) -> Response:
        return jsonify({"success": feed_filter.forget(tweet_id)})

    @app.errorhandler(404)
    def not_found(_: Exception) -> Tuple[Response, int]:
        return jsonify({"error": "Not found"}), 404

    logger.info(f"🤖  Better Feeds ready ({config.store_backend} store, classifier trained: {engine.model.is_ready()})")
    return app


if __name__ == "__main__":
    # Suppress Flask development server warning in production
    if os.environ.get('RENDER'):
        import logging
        logging.getLogger('werkzeug').setLevel(logging.ERROR)
    config = Config()
    create_app(config).run(host='0.0.0.0', port=config.port)
