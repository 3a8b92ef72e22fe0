"""Tests for structured logging of session notifications."""

from unittest.mock import Mock, patch

from structlog.testing import capture_logs

from quantdash.logging.config import configure_logging, get_logger, get_session_logger, log_notification
from quantdash.state import commands
from quantdash.state.models import Notification, NotificationVariant


class TestLoggingConfiguration:
    """Test logger factories."""

    def setup_method(self):
        configure_logging(level="DEBUG", format_json=True)

    def test_get_logger(self):
        logger = get_logger("quantdash.test")
        assert logger is not None

    def test_session_logger_binds_subsystem(self):
        with capture_logs() as captured:
            get_session_logger("quantdash.test").info("hello")

        assert captured[0]["subsystem"] == "session"
        assert captured[0]["event"] == "hello"


class TestNotificationLogging:
    """Test notification log levels."""

    def setup_method(self):
        self.logger = Mock()
        self.bound = Mock()
        self.logger.bind.return_value = self.bound
        self.bound.bind.return_value = self.bound

    def test_default_logged_at_info(self):
        log_notification(self.logger, Notification("Portfolio Optimized"))

        self.bound.info.assert_called_once_with("Notification raised")
        self.bound.warning.assert_not_called()

    def test_destructive_logged_as_warning(self):
        notification = Notification("Processing Error", "bad file", NotificationVariant.DESTRUCTIVE)
        log_notification(self.logger, notification, context={"symbol": "TSLA"})

        self.bound.warning.assert_called_once_with("Notification raised")
        self.logger.bind.assert_called_once_with(
            title="Processing Error",
            description="bad file",
            variant=NotificationVariant.DESTRUCTIVE,
        )
        self.bound.bind.assert_called_once_with(context={"symbol": "TSLA"})

    def test_commands_log_notifications(self, rng):
        state = commands.initial_state(rng, "TSLA", days=30)

        with patch.object(commands, "logger") as mock_logger:
            commands.optimize_portfolio(state)

        mock_logger.bind.assert_called_once_with(
            title="Portfolio Optimized",
            description="Optimal asset allocation calculated",
            variant=NotificationVariant.DEFAULT,
        )
