"""
Logging utilities
"""
import logging
import logging.config
import time
import functools
from pathlib import Path
from typing import Callable, Any
import yaml
from config.settings import settings


def setup_logging(config_path: str = "config/logging.yaml") -> None:
    """
    Initialize logging

    Args:
        config_path: path to the logging YAML config
    """
    config_file = Path(config_path)

    if config_file.exists():
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
            logging.config.dictConfig(config)
    else:
        logging.basicConfig(
            level=getattr(logging, settings.log_level.upper()),
            format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    app_logger = logging.getLogger("immidraft")
    app_logger.setLevel(getattr(logging, settings.log_level.upper()))

    # Application logs are also written to a file when a path is configured
    if settings.log_file_path:
        log_path = Path(settings.log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if not any(
            isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_path.resolve()
            for handler in app_logger.handlers
        ):
            file_handler = logging.FileHandler(log_path, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            app_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module"""
    return logging.getLogger(name)


def log_execution_time(logger: logging.Logger = None):
    """
    Decorator logging how long a call took

    Args:
        logger: logger to use (defaults to the wrapped function's module logger)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            log = logger or get_logger(func.__module__)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                log.info(
                    f"{func.__name__} finished in {time.time() - start_time:.3f}s"
                )
                return result
            except Exception as e:
                log.error(
                    f"{func.__name__} failed after {time.time() - start_time:.3f}s: {str(e)}"
                )
                raise

        return wrapper
    return decorator
