"""
Run logger - Structured logging for PAN validation runs

Provides consistent log lines per test case: inputs before the request,
pass/fail summary after validation.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from .config import KraCheckConfig
from .results import ValidationResult
from .test_cases import TestCase

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'


def summary_lines(result: ValidationResult, profile: str = KraCheckConfig.PROFILE_REGRESSION,
                  request_name: Optional[str] = None) -> List[str]:
    """Summary lines for one validated test case."""
    if result.total == 0:
        return [f"[COMPLETE] {result.test_id} - Tests completed"]

    if profile == KraCheckConfig.PROFILE_SMOKE:
        status = "[SUCCESS] SMOKE PASS" if result.passed else "[FAILURE] SMOKE FAIL"
        return [f"{status} - {request_name or result.test_id}"]

    status = "[PASS] PASS" if result.passed else "[FAIL] FAIL"
    lines = [f"{status} {result.test_id}: {result.passed_count}/{result.total} tests passed"]
    if not result.passed:
        lines.append("[FAIL] Failed assertions:")
        lines.extend(f"   - {c.name}" for c in result.failures)
    return lines


class RunLogger:
    """Structured logger for validation runs."""

    def __init__(self, name: str = "kra_check.run", log_dir: Optional[Path] = None,
                 level: str = "INFO", configure_handlers: bool = False, stream: Optional[TextIO] = None):
        self.name = name
        self.logger = logging.getLogger(name)

        if configure_handlers:
            self.logger.setLevel(logging.DEBUG)

            # Clear existing handlers
            self.logger.handlers.clear()

            # Console handler
            console_handler = logging.StreamHandler(stream or sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            self.logger.addHandler(console_handler)

            # File handler if log_dir provided
            if log_dir:
                log_dir.mkdir(parents=True, exist_ok=True)
                log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
                file_handler = logging.FileHandler(log_file, encoding="utf-8")
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
                self.logger.addHandler(file_handler)

    def _format(self, message: str, data: Dict[str, Any]) -> str:
        if data:
            return f"{message} | {json.dumps(data, ensure_ascii=False)}"
        return message

    def info(self, message: str, **kwargs):
        """Log info message with optional structured data."""
        self.logger.info(self._format(message, kwargs))

    def error(self, message: str, **kwargs):
        """Log error message with optional structured data."""
        self.logger.error(self._format(message, kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message with optional structured data."""
        self.logger.warning(self._format(message, kwargs))

    def debug(self, message: str, **kwargs):
        """Log debug message with optional structured data."""
        self.logger.debug(self._format(message, kwargs))

    def log_test_start(self, test_case: TestCase):
        """Log inputs and expectations before a request is sent."""
        label = f"{test_case.test_id}: {test_case.description}" if test_case.description else test_case.test_id
        self.info(f"[TEST] Test {label}")
        self.info("[INPUT] Input Data", **test_case.describe_inputs())
        self.info(
            f"[EXPECTED] Expected: HTTP {test_case.expected_http_status}, "
            f"App: {test_case.expected_app_status}"
        )

    def log_result(self, result: ValidationResult, profile: str = KraCheckConfig.PROFILE_REGRESSION,
                   request_name: Optional[str] = None):
        """Log the pass/fail summary of a validated test case."""
        for line in summary_lines(result, profile, request_name):
            if result.passed:
                self.info(line)
            else:
                self.warning(line)
        for check in result.failures:
            if check.message:
                self.debug(f"{check.name}: {check.message}")


def setup_run_logger(config: KraCheckConfig, name: str = "kra_check.run",
                     stream: Optional[TextIO] = None) -> RunLogger:
    """Run logger with console (and optional file) handlers from config."""
    log_dir = Path(config.log_dir) if config.log_dir else None
    return RunLogger(name, log_dir=log_dir, level=config.log_level, configure_handlers=True, stream=stream)
