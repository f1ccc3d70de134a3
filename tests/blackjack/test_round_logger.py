import logging

from shoejack.blackjack.action import Action
from shoejack.blackjack.round_logger import RoundLogger, logging_disabled


def test_transcript_moves_to_last_round():
    log = RoundLogger()
    log.log_round_start(1, 10)
    log.log_status(1, "betting", "Bet placed")
    log.log_status(1, "dealing", "Dealing cards...")
    assert [entry.message for entry in log.current_round] == ["Bet placed", "Dealing cards..."]

    log.log_round_end(1, 1010, 10)
    assert log.current_round == []
    assert log.last_round_messages() == ["Bet placed", "Dealing cards..."]
    assert len(log.history) == 2
    assert log.history[1].to_dict()["phase"] == "dealing"


def test_round_start_drops_stale_messages():
    log = RoundLogger()
    log.log_status(0, "betting", "Invalid bet! Min: 10, Max: 1000")
    log.log_round_start(1, 10)
    assert log.current_round == []


def test_actions_are_logged(caplog):
    log = RoundLogger()
    with caplog.at_level(logging.INFO, logger="shoejack.rounds"):
        log.log_action(2, 0, Action.HIT, "drew 5 of ♠ for 15")
    assert "Round 2 hand 1: hit drew 5 of ♠ for 15" in caplog.text


def test_rejections_are_warnings(caplog):
    log = RoundLogger()
    with caplog.at_level(logging.WARNING, logger="shoejack.rounds"):
        log.log_rejection("hit", "You cannot hit during betting.")
    assert caplog.records[-1].levelno == logging.WARNING


def test_logging_can_be_disabled(monkeypatch):
    monkeypatch.setenv("SHOEJACK_DISABLE_LOGGING", "true")
    assert logging_disabled()
    log = RoundLogger()
    assert log.logger.level == logging.ERROR


def test_logging_enabled_by_default(monkeypatch):
    monkeypatch.delenv("SHOEJACK_DISABLE_LOGGING", raising=False)
    assert not logging_disabled()
