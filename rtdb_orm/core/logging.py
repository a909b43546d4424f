import logging
import sys
from rtdb_orm.core.config import settings


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional collection and op fields."""
    def format(self, record):
        # Add default values for collection and op if not present
        if not hasattr(record, 'collection'):
            record.collection = '-'
        if not hasattr(record, 'op'):
            record.op = '-'
        return super().format(record)


def configure_logging(level: str | int | None = None) -> None:
    level = level if level is not None else settings.log_level
    if isinstance(level, str):
        level = level.upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [collection=%(collection)s op=%(op)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level,
        handlers=[handler],
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("rtdb_orm").setLevel(level)
