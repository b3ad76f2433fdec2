from .logging_utils import get_logger, setup_logging, resolve_log_level, apply_log_level, LoggerMixin

__all__ = [
    'get_logger',
    'setup_logging',
    'resolve_log_level',
    'apply_log_level',
    'LoggerMixin',
]
