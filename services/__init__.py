from .classifier_service import PreferenceModel
from .decision_service import DecisionEngine
from .ledger_service import InteractionLedger
from .message_service import MessageService, parse_message
from .feed_filter_service import FeedFilterService

__all__ = ["PreferenceModel", "DecisionEngine", "InteractionLedger", "MessageService", "parse_message", "FeedFilterService"]
