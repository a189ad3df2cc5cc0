"""
Unit tests for environment configuration.
"""
import logging
from pathlib import Path

import pytest

from idhunt.config import HuntConfig, LogConfig, setup_logging
from idhunt.errors import ConfigurationError, ErrorCode

BASE_ENV = {"URL_PATH": "https://example.com/files", "SESSION_ID": "abc"}


class TestFromEnv:
    def test_required_values(self):
        config = HuntConfig.from_env(BASE_ENV)
        assert config.target.url_path == "https://example.com/files"
        assert config.target.session_id == "abc"

    def test_defaults(self):
        config = HuntConfig.from_env(BASE_ENV)
        assert config.transport.timeout == 10.0
        assert config.transport.verify_tls is True
        assert config.transport.user_agent.startswith("idhunt/")
        assert config.log.level == "INFO"
        assert config.log.file_path is None

    @pytest.mark.parametrize("missing", ["URL_PATH", "SESSION_ID"])
    def test_missing_required_names_variable(self, missing):
        env = {k: v for k, v in BASE_ENV.items() if k != missing}
        with pytest.raises(ConfigurationError) as exc_info:
            HuntConfig.from_env(env)
        err = exc_info.value
        assert err.code is ErrorCode.CONFIG_MISSING_REQUIRED
        assert err.message == f"Must define {missing} environment variable!"
        assert err.details == {"variable": missing}

    def test_empty_value_counts_as_missing(self):
        with pytest.raises(ConfigurationError):
            HuntConfig.from_env({"URL_PATH": "", "SESSION_ID": "abc"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("URL_PATH", "http://target.local/get.php")
        monkeypatch.setenv("SESSION_ID", "from-env")
        config = HuntConfig.from_env()
        assert config.target.url_path == "http://target.local/get.php"
        assert config.target.session_id == "from-env"

    def test_optional_overrides(self):
        env = dict(
            BASE_ENV,
            IDHUNT_TIMEOUT="2.5",
            IDHUNT_VERIFY_TLS="false",
            IDHUNT_USER_AGENT="custom",
            IDHUNT_LOG_LEVEL="DEBUG",
            IDHUNT_LOG_FILE="/tmp/idhunt.log",
            IDHUNT_LOG_BACKUPS="2",
        )
        config = HuntConfig.from_env(env)
        assert config.transport.timeout == 2.5
        assert config.transport.verify_tls is False
        assert config.transport.user_agent == "custom"
        assert config.log.level == "DEBUG"
        assert config.log.file_path == Path("/tmp/idhunt.log")
        assert config.log.backup_count == 2

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_bad_timeout(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            HuntConfig.from_env(dict(BASE_ENV, IDHUNT_TIMEOUT=value))
        assert exc_info.value.code is ErrorCode.CONFIG_INVALID

    def test_bad_integer(self):
        with pytest.raises(ConfigurationError) as exc_info:
            HuntConfig.from_env(dict(BASE_ENV, IDHUNT_LOG_MAX_MB="ten"))
        assert exc_info.value.details["variable"] == "IDHUNT_LOG_MAX_MB"


class TestSetupLogging:
    def test_sets_level(self):
        setup_logging(LogConfig(level="warning"))
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError):
            setup_logging(LogConfig(level="LOUD"))

    def test_file_handler(self, tmp_path):
        log_path = tmp_path / "hunt.log"
        setup_logging(LogConfig(file_path=log_path))
        logging.getLogger("idhunt.test").info("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written to file" in log_path.read_text()

    def test_unopenable_log_file_is_a_config_error(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            setup_logging(LogConfig(file_path=tmp_path / "missing" / "hunt.log"))
        err = exc_info.value
        assert err.code is ErrorCode.CONFIG_INVALID
        assert err.details["variable"] == "IDHUNT_LOG_FILE"
        assert "Cannot open log file" in err.message

    def test_level_checked_before_file_is_opened(self, tmp_path):
        log_path = tmp_path / "hunt.log"
        with pytest.raises(ConfigurationError):
            setup_logging(LogConfig(level="LOUD", file_path=log_path))
        assert not log_path.exists()
