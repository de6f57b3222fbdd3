# utils package initialization

from .logging_config import setup_logging, get_logger, redact

__all__ = ['setup_logging', 'get_logger', 'redact']
