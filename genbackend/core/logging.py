import logging
import sys


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional generation_id and stage fields."""
    def format(self, record):
        # Add default values for generation_id and stage if not present
        if not hasattr(record, 'generation_id'):
            record.generation_id = '-'
        if not hasattr(record, 'stage'):
            record.stage = '-'
        return super().format(record)


def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [generation_id=%(generation_id)s stage=%(stage)s] - %(message)s"
    ))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[handler],
        force=True,
    )
