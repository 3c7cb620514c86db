# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Tests for the logging abstraction."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from kakao_token import Logger, SilentLogger, StdoutLogger, create_logger
from kakao_token.logger import REDACTED, redact


class TestRedact:
    """Tests for credential masking."""

    def test_token_fields_are_masked(self):
        """Test token and secret fields never keep their value."""
        fields = redact({
            "access_token": "tok",
            "Authorization": "Bearer tok",
            "client_secret": "s3cret",
            "profile_id": 123,
        })

        assert fields == {
            "access_token": REDACTED,
            "Authorization": REDACTED,
            "client_secret": REDACTED,
            "profile_id": 123,
        }

    def test_url_query_token_is_masked(self):
        """Test a token in a URL query string is replaced, other params kept."""
        fields = redact({"url": "https://kapi.kakao.com/v1/user/me?access_token=tok&lang=ko"})

        assert "tok&" not in fields["url"]
        assert f"access_token={REDACTED}" in fields["url"]
        assert "lang=ko" in fields["url"]

    def test_url_without_credentials_is_unchanged(self):
        """Test a plain URL passes through as-is."""
        url = "https://kapi.kakao.com/v1/user/me"

        assert redact({"url": url}) == {"url": url}

    def test_input_is_not_mutated(self):
        """Test redact returns a new dict."""
        fields = {"refresh_token": "r"}

        redact(fields)

        assert fields == {"refresh_token": "r"}


class TestLoggerFactory:
    """Tests for create_logger factory function."""

    def test_create_stdout_logger(self):
        """Test creating a stdout logger."""
        logger = create_logger(logger_type="stdout", level="info")

        assert isinstance(logger, StdoutLogger)
        assert isinstance(logger, Logger)
        assert logger.level == "INFO"

    def test_create_silent_logger(self):
        """Test creating a silent logger."""
        assert isinstance(create_logger(logger_type="silent"), SilentLogger)

    def test_unknown_logger_type(self):
        """Test that unknown logger type raises ValueError."""
        with pytest.raises(ValueError, match="Unknown logger_type"):
            create_logger(logger_type="syslog")

    def test_invalid_level(self):
        """Test an unknown level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            create_logger(logger_type="silent", level="VERBOSE")

    def test_environment_defaults(self):
        """Test LOG_TYPE, LOG_LEVEL and LOG_NAME are used when arguments are omitted."""
        with patch.dict(os.environ, {"LOG_TYPE": "silent", "LOG_LEVEL": "WARNING", "LOG_NAME": "env-service"}):
            logger = create_logger()

        assert isinstance(logger, SilentLogger)
        assert logger.level == "WARNING"
        assert logger.name == "env-service"

    def test_builtin_defaults(self):
        """Test defaults when nothing is configured."""
        with patch.dict(os.environ, {}, clear=True):
            logger = create_logger()

        assert isinstance(logger, StdoutLogger)
        assert logger.level == "INFO"
        assert logger.name == "kakao_token"


class TestStdoutLogger:
    """Tests for StdoutLogger."""

    def test_writes_json_line(self, capsys):
        """Test a log call writes one JSON object to stdout."""
        logger = StdoutLogger(level="INFO", name="test-service")

        logger.info("Request authenticated", strategy="kakao-token")

        entry = json.loads(capsys.readouterr().out.strip())
        assert entry["level"] == "INFO"
        assert entry["logger"] == "test-service"
        assert entry["message"] == "Request authenticated"
        assert entry["extra"] == {"strategy": "kakao-token"}
        assert entry["timestamp"].endswith("Z")

    def test_written_entry_is_redacted(self, capsys):
        """Test credentials never reach stdout."""
        logger = StdoutLogger(name="test-service")

        logger.warning("Provider request rejected", url="https://x/me?access_token=leak", access_token="leak")

        assert "leak" not in capsys.readouterr().out

    def test_filters_below_level(self, capsys):
        """Test messages below the configured level are dropped."""
        logger = StdoutLogger(level="WARNING")

        logger.info("not shown")
        logger.debug("not shown either")

        assert capsys.readouterr().out == ""

    def test_emits_to_stdlib_logging(self, caplog):
        """Test records reach stdlib logging handlers with redacted fields."""
        logger = StdoutLogger(level="INFO", name="kakao_token.caplog")

        with caplog.at_level(logging.INFO, logger="kakao_token.caplog"):
            logger.warning("Authentication failed", path="/me", refresh_token="r")

        record = next(r for r in caplog.records if r.getMessage() == "Authentication failed")
        assert record.fields == {"path": "/me", "refresh_token": REDACTED}


class TestSilentLogger:
    """Tests for SilentLogger."""

    def test_records_everything_by_default(self):
        """Test the default level keeps debug entries."""
        logger = SilentLogger()

        logger.debug("Public path, skipping authentication", path="/health")

        assert logger.level == "DEBUG"
        assert logger.entries == [{
            "level": "DEBUG",
            "message": "Public path, skipping authentication",
            "fields": {"path": "/health"},
        }]

    def test_level_filtering(self):
        """Test a configured level drops lower entries."""
        logger = SilentLogger(level="WARNING")

        logger.info("Request authenticated")
        logger.error("Profile lookup failed")

        assert logger.messages() == ["Profile lookup failed"]

    def test_has_log_by_fragment_and_level(self):
        """Test substring search with an optional level."""
        logger = SilentLogger()
        logger.error("Profile lookup failed: InternalOAuthError")

        assert logger.has_log("Profile lookup failed")
        assert logger.has_log("InternalOAuthError", level="ERROR")
        assert not logger.has_log("Profile lookup failed", level="INFO")
