"""
Centralized Logging Configuration using Logfire
The API backend, the CLI and the ranking engine share this configuration.

Features:
- Structured logging with spans
- Console and cloud logging (cloud only when a token is present)
- LLM call tracking
"""

import os
import time
from contextlib import contextmanager
from logging import basicConfig, getLogger, DEBUG, INFO

import logfire

# ═══════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════
DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"
SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "product-recommender")
SEND_TO_LOGFIRE = os.getenv("SEND_TO_LOGFIRE", "if-token-present")
LOG_LEVEL = DEBUG if DEBUG_MODE else INFO

EMOJI = {
    "start": "🚀",
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "debug": "🔍",
    "llm": "🤖",
    "http": "🌐",
}


# ═══════════════════════════════════════════════════════════════
# Logfire Configuration
# ═══════════════════════════════════════════════════════════════
_configured = False


def configure_logging(service_name: str = None) -> "logfire":
    """
    Configure Logfire for the application.

    Args:
        service_name: Optional service name override (e.g., "recommender-cli")

    Returns:
        Configured logfire instance
    """
    global _configured

    if _configured:
        return logfire

    final_service_name = service_name or SERVICE_NAME

    logfire.configure(
        service_name=final_service_name,
        send_to_logfire=SEND_TO_LOGFIRE,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents" if DEBUG_MODE else "simple",
            include_timestamps=True,
            verbose=DEBUG_MODE,
            min_log_level="debug" if DEBUG_MODE else "info",
        ),
    )

    # Integrate with standard library logging
    basicConfig(
        level=LOG_LEVEL,
        handlers=[logfire.LogfireLoggingHandler()],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    _configured = True
    logfire.info(f"{EMOJI['start']} Logging configured for {final_service_name}")

    return logfire


# ═══════════════════════════════════════════════════════════════
# Logger Factory
# ═══════════════════════════════════════════════════════════════
class RecommenderLogger:
    """Logger with structured attributes, prefixed with the component name."""

    def __init__(self, name: str):
        self.name = name
        self._logger = getLogger(name)
        self._logger.setLevel(LOG_LEVEL)

    def info(self, message: str, **kwargs):
        """Log info with optional structured data."""
        logfire.info(f"{EMOJI['info']} [{self.name}] {message}", **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug with optional structured data."""
        if DEBUG_MODE:
            logfire.debug(f"{EMOJI['debug']} [{self.name}] {message}", **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning with optional structured data."""
        logfire.warn(f"{EMOJI['warning']} [{self.name}] {message}", **kwargs)

    def error(self, message: str, error: Exception = None, **kwargs):
        """Log error with optional exception details."""
        if error:
            kwargs["error_type"] = type(error).__name__
            kwargs["error_message"] = str(error)
        logfire.error(f"{EMOJI['error']} [{self.name}] {message}", **kwargs)

    def success(self, message: str, **kwargs):
        """Log success message."""
        logfire.info(f"{EMOJI['success']} [{self.name}] {message}", **kwargs)

    @contextmanager
    def llm_span(self, model: str, prompt_preview: str = None, **attributes):
        """Create a span for LLM operations."""
        start_time = time.time()
        preview = prompt_preview[:100] + "..." if prompt_preview and len(prompt_preview) > 100 else prompt_preview
        logfire.info(f"{EMOJI['llm']} [{self.name}] LLM call", model=model, prompt_preview=preview, **attributes)

        try:
            with logfire.span("llm.call", model=model, **attributes) as span:
                yield span
                duration = time.time() - start_time
                logfire.info(
                    f"{EMOJI['success']} [{self.name}] LLM response received",
                    model=model,
                    duration_ms=round(duration * 1000, 2),
                )
        except Exception as e:
            duration = time.time() - start_time
            logfire.error(
                f"{EMOJI['error']} [{self.name}] LLM call failed",
                model=model,
                duration_ms=round(duration * 1000, 2),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise


def get_logger(name: str) -> RecommenderLogger:
    """Get a RecommenderLogger instance for the given name."""
    return RecommenderLogger(name)
