import logging
import sys


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional entity and op fields."""
    def format(self, record):
        # Add default values for entity and op if not present
        if not hasattr(record, 'entity'):
            record.entity = '-'
        if not hasattr(record, 'op'):
            record.op = '-'
        return super().format(record)


def configure_logging(level: str = "INFO", stream=None) -> None:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [entity=%(entity)s op=%(op)s] - %(message)s"
    ))
    logging.basicConfig(
        level=level.upper(),
        handlers=[handler],
    )
