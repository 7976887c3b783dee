"""
Structured Logging Configuration
Console/file logs plus a dedicated user-activity log
"""
import sys
import logging
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import Settings, settings as default_settings


HUMAN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
PLAIN_FORMAT = "{time} | {level} | {name}:{function}:{line} | {message}"
ACTIVITY_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {extra[event]} | User: {extra[nric]} | Type: {extra[role]}"

# Logger bound for login/logout records; routed only to the activity sink
activity_logger = logger.bind(activity=True)


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to Loguru"""
    
    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        
        # Find caller
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        
        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _is_activity(record) -> bool:
    return bool(record["extra"].get("activity"))


def _not_activity(record) -> bool:
    return not record["extra"].get("activity")


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure Loguru logging"""
    config = config or default_settings
    
    # Remove default logger
    logger.remove()
    
    # Add console logger
    if config.LOG_JSON_FORMAT and config.ENVIRONMENT == "production":
        # JSON format for production
        logger.add(
            sys.stdout,
            format=PLAIN_FORMAT,
            level=config.LOG_LEVEL,
            serialize=True,
            filter=_not_activity,
        )
    else:
        # Human-readable format for development
        logger.add(
            sys.stdout,
            format=HUMAN_FORMAT,
            level=config.LOG_LEVEL,
            colorize=True,
            filter=_not_activity,
        )
    
    if config.LOG_TO_FILE:
        log_dir = Path(config.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        
        logger.add(
            str(log_dir / "app_{time:YYYY-MM-DD}.log"),
            rotation="00:00",  # Rotate daily
            retention="30 days",
            level=config.LOG_LEVEL,
            format=PLAIN_FORMAT if config.LOG_JSON_FORMAT else HUMAN_FORMAT,
            serialize=config.LOG_JSON_FORMAT,
            filter=_not_activity,
        )
        
        # Append-only user activity trail (login/logout)
        logger.add(
            str(log_dir / "user_activity.log"),
            format=ACTIVITY_FORMAT,
            level="INFO",
            filter=_is_activity,
        )
    
    # Intercept standard logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    
    # Intercept sqlalchemy logs
    logging.getLogger("sqlalchemy.engine").handlers = [InterceptHandler()]
    
    logger.info(f"Logging configured: level={config.LOG_LEVEL}, json={config.LOG_JSON_FORMAT}")


def log_user_activity(event: str, nric: str, role: str) -> None:
    """Record a login/logout event in the user activity log"""
    activity_logger.bind(event=event, nric=nric, role=role).info(f"{event} {nric}")
