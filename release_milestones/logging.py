"""CLI logging setup.

Records go to stderr so JSON printed on stdout stays parseable. Level and
format come from config.yaml (logging.level, logging.format) or env
(LOGGING_LEVEL, LOGGING_FORMAT); an unknown level name means INFO.
"""

import logging
import sys

from release_milestones.config import LoggingConfig

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper().strip())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger for one CLI run."""
    level = resolve_level(config.level)
    logging.basicConfig(
        level=level,
        format=config.format or DEFAULT_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    # urllib3 logs every connection at DEBUG; page requests are logged by the adapter.
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
