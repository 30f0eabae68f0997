"""
Logging configuration for the Gifddo client.

Provides structured JSON logging for payment audit trails and debugging.
Private keys and MAC values are never logged.
"""

import json
import logging
import sys
import time
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a consistent JSON format suitable for
    log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


class PaymentAuditLogger:
    """
    Logger for payment lifecycle events.

    One event per step: request built, gateway redirect or failure,
    response verified.
    """

    def __init__(self, name: str = "gifddo.audit"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, event_type: str, **kwargs) -> None:
        """Internal logging method with extra fields."""
        if not self._logger.isEnabledFor(level):
            return
        extra = {"event_type": event_type, **kwargs}
        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "",
            0,
            f"{event_type}: {kwargs.get('message', '')}",
            (),
            None
        )
        record.extra_fields = extra
        self._logger.handle(record)

    def payment_initiated(self, merchant_id: str, stamp: str, reference: str, amount: str, currency: str) -> None:
        self._log(
            logging.INFO,
            "PAYMENT_INITIATED",
            merchant_id=merchant_id,
            stamp=stamp,
            reference=reference,
            amount=amount,
            currency=currency,
            message=f"Payment request {stamp} built for reference {reference}"
        )

    def gateway_redirect(self, stamp: str, mode: str, location: str) -> None:
        self._log(
            logging.INFO,
            "GATEWAY_REDIRECT",
            stamp=stamp,
            mode=mode,
            location=location,
            message=f"Gateway accepted request {stamp}"
        )

    def gateway_failure(self, stamp: str, mode: str, reason: str) -> None:
        self._log(
            logging.ERROR,
            "GATEWAY_FAILURE",
            stamp=stamp,
            mode=mode,
            reason=reason,
            message=f"Gateway request {stamp} failed: {reason}"
        )

    def response_verified(self, stamp: Optional[str], service: Optional[str], valid: bool) -> None:
        """Log the result of checking a gateway response MAC."""
        level = logging.INFO if valid else logging.WARNING
        self._log(
            level,
            "RESPONSE_VERIFIED",
            stamp=stamp,
            service=service,
            valid=valid,
            message=f"Response {stamp} signature {'valid' if valid else 'INVALID'}"
        )


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatting
        log_file: Optional file path for log output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


# Global audit logger instance
audit_log = PaymentAuditLogger()
