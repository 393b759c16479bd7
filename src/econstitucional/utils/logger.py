import logging
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "econstitucional"


def setup_logger(
  name: str = LOGGER_NAME,
  log_file: Optional[str] = "logs/econstitucional.log",
  level: str = "INFO"
):
  """
  Simple one-level logger setup
  
  Args:
    name: Logger name
    log_file: Path to log file, or None for console only
    level: Log level (DEBUG, INFO, WARNING, ERROR)
  """
  logger = logging.getLogger(name)
  logger.setLevel(getattr(logging, level.upper()))
  
  # Clear existing handlers
  logger.handlers.clear()
  
  # Console handler
  console_handler = logging.StreamHandler(sys.stdout)
  console_format = logging.Formatter(
    "%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S"
  )
  console_handler.setFormatter(console_format)
  logger.addHandler(console_handler)
  
  # File handler
  if log_file:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_format = logging.Formatter(
      "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
      datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)
  
  return logger


def setup_logger_from_config(config: dict, level: Optional[str] = None):
  """Configure the package logger from the 'logging' config section"""
  log_config = config.get('logging', {})
  return setup_logger(
    log_file = log_config.get('file', "logs/econstitucional.log"),
    level = level or log_config.get('level', "INFO")
  )

# Global logger instance
logger = logging.getLogger(LOGGER_NAME)
