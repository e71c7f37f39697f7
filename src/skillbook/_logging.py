import logging
import os

_logging_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure logging from the LOG_LEVEL environment variable, or an explicit level."""
    global _logging_configured

    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    # Only configure if not already configured (avoid duplicate handlers)
    if not logging.root.handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        _logging_configured = True
        logging.debug(f"Logging configured with level: {log_level}")
    elif not _logging_configured:
        logging.root.setLevel(log_level)
        _logging_configured = True
        logging.debug(f"Logging level updated to: {log_level}")
    else:
        logging.root.setLevel(log_level)
