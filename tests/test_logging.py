import logging

import pytest

from movie_rental_api.app.core.logging_config import API_LOGGER_NAME, setup_logging
from movie_rental_api.app.services.movie_service import MovieService


@pytest.fixture
def api_logger():
    logger = logging.getLogger(API_LOGGER_NAME)
    level = logger.level
    yield logger
    logger.setLevel(level)


def test_setup_logging_returns_named_api_logger(api_logger):
    logger = setup_logging("debug")
    assert logger is api_logger
    assert logger.name == "movie_rental_api"
    assert logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(api_logger):
    assert setup_logging("chatty").level == logging.INFO


def test_service_loggers_live_under_the_api_logger(store):
    assert MovieService(store).logger.name.startswith(API_LOGGER_NAME + ".")
