"""
Centralized logging configuration.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


class LoggingConfig:
    """Centralized logging configuration manager."""

    @staticmethod
    def setup_logging(
        log_level: str = "INFO",
        log_dir: Optional[str] = None,
        app_name: str = "vrf_sizing",
        max_file_size: int = 5 * 1024 * 1024,  # 5MB
        backup_count: int = 3,
    ) -> logging.Logger:
        """
        Set up application logging with a console handler and an optional
        rotating file handler.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files; no file logging when None
            app_name: Application name used for the log file name
            max_file_size: Maximum size of each log file in bytes
            backup_count: Number of rotated files to keep

        Returns:
            Configured root logger
        """
        level = LoggingConfig._parse_level(log_level)

        logger = logging.getLogger()
        logger.setLevel(level)
        logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
        logger.addHandler(console_handler)

        if log_dir:
            Path(log_dir).mkdir(parents=True, exist_ok=True)
            log_file = os.path.join(log_dir, f"{app_name}.log")
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_file_size,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
            logger.addHandler(file_handler)

        logger.info(f"Logging configured - Level: {logging.getLevelName(level)}")
        return logger

    @staticmethod
    def set_log_level(level: str) -> None:
        """
        Set logging level for the root logger and its console handlers.

        Args:
            level: New logging level
        """
        numeric_level = LoggingConfig._parse_level(level)
        root = logging.getLogger()
        root.setLevel(numeric_level)
        for handler in root.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(numeric_level)

    @staticmethod
    def _parse_level(level: str) -> int:
        numeric_level = getattr(logging, str(level).upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f"Invalid log level: {level}")
        return numeric_level
