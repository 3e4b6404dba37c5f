"""Logging configuration for the slug store service."""

import logging
import sys


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the package logger with a console handler.
    
    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        
    Returns:
        The configured "slugstore_app" logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    
    logger = logging.getLogger("slugstore_app")
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    return logger
