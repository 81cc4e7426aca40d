"""Structured logging configuration for the environment gating service"""
import os
import sys
import logging
from typing import Any, Dict, Iterable, Optional
import structlog
from structlog.stdlib import LoggerFactory
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, StackInfoRenderer
from utils.process import get_process_identity, process_identity


def add_process_identity(logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Label every event with the identity of the current process"""
    event_dict.setdefault("pid", get_process_identity())
    return event_dict


def setup_structured_logging(config) -> None:
    """Setup structured logging with JSON format for production and console for development"""

    process_identity.configure(config.identity_timeout)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso"),
        add_process_identity,
        StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Use JSON renderer for production, console for development
    is_development = os.getenv("ENVIRONMENT", "production").lower() == "development"
    if is_development:
        processors.append(ConsoleRenderer())
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.log_level.upper())
    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(config.log_file))
        file_handler.setLevel(level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
        force=True
    )

    # Set specific logger levels to reduce noise
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('fastapi').setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


def log_environment_startup(logger: structlog.stdlib.BoundLogger, config, context=None) -> None:
    """Log service startup with the runtime context it runs in"""
    attributes = context.as_dict() if context is not None else config.get_context_attributes()
    logger.info(
        "Service starting up",
        service_name=config.service_name,
        service_version=config.service_version,
        diagnostics_port=config.diagnostics_port,
        event_type="server_startup",
        **attributes
    )


def log_component_gating(logger: structlog.stdlib.BoundLogger, name: str, active: bool,
                         tags: Optional[Iterable[Any]] = None) -> None:
    """Log whether a component was activated or skipped"""
    logger.info(
        "Component activated" if active else "Component skipped",
        component=name,
        active=active,
        tags=[repr(tag) for tag in tags or ()],
        event_type="component_gating"
    )


def log_error(logger: structlog.stdlib.BoundLogger, error: Exception, context: Dict[str, Any] = None) -> None:
    """Log error with structured context"""
    logger.error(
        "Error occurred",
        error=str(error),
        error_type=type(error).__name__,
        context=context or {},
        event_type="error",
        exc_info=True
    )
