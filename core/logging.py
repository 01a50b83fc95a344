import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure logging for the whole portal.
    Call this once from the API factory and at the top of the console pages.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

