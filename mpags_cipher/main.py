import logging
import sys

from mpags_cipher.core.config import get_settings
from mpags_cipher.services.pipeline.orchestrator import CipherOrchestrator


def configure_logging(level: str) -> None:
    """Send log records to stderr so they never mix with cipher output."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Run the command-line tool and exit with its status."""
    settings = get_settings()
    configure_logging(settings.log_level)

    orchestrator = CipherOrchestrator(settings=settings)
    sys.exit(orchestrator.run(sys.argv))


if __name__ == "__main__":
    run()
