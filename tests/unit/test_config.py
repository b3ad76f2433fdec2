"""
Unit Tests for runtime configuration
Version: 1.0.0
Purpose: Environment and config.env handling, required URLs and timeouts
"""

import logging

import pytest

from documentwise_engine.config import ApiConfig, load_env_file, read_config
from documentwise_engine.exceptions import ConfigurationError
from documentwise_engine.utils import get_logger

BASE_ENV = {
    "DOCUMENTWISE_API_BASE_URL": "http://api.test/",
    "DOCUMENTWISE_CHAT_API_BASE_URL": "http://chat.test",
}


@pytest.fixture
def no_env_file(tmp_path):
    return tmp_path / "missing.env"


def test_reads_environment_and_strips_trailing_slash(no_env_file):
    config = read_config(BASE_ENV, env_file=no_env_file)
    assert config == ApiConfig(
        api_base_url="http://api.test",
        chat_api_base_url="http://chat.test",
        request_timeout=30,
        log_level="INFO",
        use_mock_data=False,
    )


@pytest.mark.parametrize("missing", ["DOCUMENTWISE_API_BASE_URL", "DOCUMENTWISE_CHAT_API_BASE_URL"])
def test_missing_url_is_configuration_error(no_env_file, missing):
    environ = {k: v for k, v in BASE_ENV.items() if k != missing}
    with pytest.raises(ConfigurationError) as exc:
        read_config(environ, env_file=no_env_file)
    assert exc.value.message == "API base URL is not configured"
    assert missing in exc.value.details


def test_blank_url_counts_as_missing(no_env_file):
    with pytest.raises(ConfigurationError):
        read_config({**BASE_ENV, "DOCUMENTWISE_API_BASE_URL": "  "}, env_file=no_env_file)


def test_mock_mode_needs_no_urls(no_env_file):
    config = read_config({"DOCUMENTWISE_USE_MOCK_DATA": "yes"}, env_file=no_env_file)
    assert config.use_mock_data is True
    assert config.api_base_url == ""


def test_env_file_fallback_and_environment_precedence(tmp_path):
    env_file = tmp_path / "config.env"
    env_file.write_text(
        "# DocumentWise\n"
        "DOCUMENTWISE_API_BASE_URL=\"http://file-api.test\"\n"
        "DOCUMENTWISE_CHAT_API_BASE_URL=http://file-chat.test\n"
        "DOCUMENTWISE_REQUEST_TIMEOUT=12\n"
        "not a setting\n"
    )
    config = read_config({"DOCUMENTWISE_CHAT_API_BASE_URL": "http://env-chat.test"}, env_file=env_file)
    assert config.api_base_url == "http://file-api.test"
    assert config.chat_api_base_url == "http://env-chat.test"
    assert config.request_timeout == 12


@pytest.mark.parametrize("timeout", ["abc", "0", "-5", "1.5"])
def test_invalid_timeout(no_env_file, timeout):
    with pytest.raises(ConfigurationError) as exc:
        read_config({**BASE_ENV, "DOCUMENTWISE_REQUEST_TIMEOUT": timeout}, env_file=no_env_file)
    assert str(exc.value) == f"Invalid DOCUMENTWISE_REQUEST_TIMEOUT: {timeout}"


def test_log_level_is_upper_cased(no_env_file):
    config = read_config({**BASE_ENV, "DOCUMENTWISE_LOG_LEVEL": "debug"}, env_file=no_env_file)
    assert config.log_level == "DEBUG"


def test_log_level_from_env_file_reaches_loggers(tmp_path):
    existing = get_logger("documentwise_engine.tests.existing")
    env_file = tmp_path / "config.env"
    env_file.write_text("DOCUMENTWISE_USE_MOCK_DATA=true\nDOCUMENTWISE_LOG_LEVEL=DEBUG\n")

    config = read_config({}, env_file=env_file)

    assert config.log_level == "DEBUG"
    assert existing.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in existing.handlers)
    assert get_logger("documentwise_engine.tests.created_after").level == logging.DEBUG


def test_load_env_file_missing(tmp_path):
    assert load_env_file(tmp_path / "nope.env") == {}


def test_config_is_immutable(no_env_file):
    config = read_config(BASE_ENV, env_file=no_env_file)
    with pytest.raises(AttributeError):
        config.api_base_url = "http://other.test"
