from services.ledger_service import InteractionLedger


def test_observe_creates_state_once() -> None:
    ledger = InteractionLedger()

    state, created = ledger.observe("t1")
    again, created_again = ledger.observe("t1")

    assert created is True
    assert created_again is False
    assert again is state
    assert len(ledger) == 1
    assert "t1" in ledger
    assert "t2" not in ledger


def test_repeated_observation_keeps_ui_flags() -> None:
    ledger = InteractionLedger()
    ledger.observe("t1")
    ledger.mark_buttons("t1")
    ledger.mark_hidden("t1")

    state, _ = ledger.observe("t1")

    assert state.has_buttons is True
    assert state.is_hidden is True


def test_record_prediction_refreshes_volatile_fields() -> None:
    ledger = InteractionLedger()
    ledger.observe("t1")
    ledger.mark_pending("t1")
    assert ledger.get("t1").pending is True

    ledger.record_prediction("t1", {"label": None, "confidence": 0.0, "sentiment": "Positive", "is_user_rated": False})
    state = ledger.record_prediction("t1", {"label": "dislike", "confidence": 0.8, "is_user_rated": False})

    assert state.prediction == "dislike"
    assert state.confidence == 0.8
    assert state.sentiment is None
    assert state.pending is False
    assert state.has_buttons is False
    assert state.is_hidden is False


def test_record_prediction_ignores_unknown_tweets() -> None:
    ledger = InteractionLedger()

    assert ledger.record_prediction("ghost", {"label": "like", "confidence": 1.0}) is None
    assert "ghost" not in ledger


def test_buttons_are_only_added_once() -> None:
    ledger = InteractionLedger()
    ledger.observe("t1")

    assert ledger.mark_buttons("t1") is True
    assert ledger.mark_buttons("t1") is False
    assert ledger.mark_buttons("unknown") is False


def test_hide_and_show_toggle() -> None:
    ledger = InteractionLedger()
    ledger.observe("t1")

    assert ledger.mark_shown("t1") is False
    assert ledger.mark_hidden("t1") is True
    assert ledger.mark_hidden("t1") is False
    assert ledger.mark_shown("t1") is True
    assert ledger.get("t1").is_hidden is False


def test_forget_drops_state() -> None:
    ledger = InteractionLedger()
    ledger.observe("t1")

    assert ledger.forget("t1") is True
    assert ledger.forget("t1") is False
    assert ledger.get("t1") is None
    _, created = ledger.observe("t1")
    assert created is True
