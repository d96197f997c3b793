# =============================================================================
# Logging Setup
# =============================================================================
# Modules log through `logging.getLogger(__name__)`; this configures the
# root logger once with a console handler. Called from the app factory and
# from scripts that run outside the web server.
# =============================================================================

import logging

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    A no-op when the root logger already has handlers (pytest, uvicorn
    with its own log config, or a repeated `create_app()` call).
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)
