import logging
import sys

from config import settings


def configure_logging(level: str | None = None) -> None:
    """
    Configure logging for the whole service.
    Called once from the FastAPI lifespan; safe to call again (basicConfig is forced).
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    if not settings.debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
