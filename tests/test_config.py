import logging

from pocket_quest.config import LOG_LEVEL_ENV, log_level_from_env


def test_log_level_defaults_to_warning():
    assert log_level_from_env({}) == logging.WARNING


def test_log_level_is_case_insensitive():
    assert log_level_from_env({LOG_LEVEL_ENV: "debug"}) == logging.DEBUG
    assert log_level_from_env({LOG_LEVEL_ENV: " Info "}) == logging.INFO


def test_unknown_log_level_falls_back_to_warning():
    assert log_level_from_env({LOG_LEVEL_ENV: "chatty"}) == logging.WARNING
