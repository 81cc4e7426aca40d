#!/usr/bin/env python3
"""Main entry point for the environment diagnostics server"""
import sys
import uvicorn
from config import Config
from environment.context import runtime_context
from app.server import DiagnosticsServer
from logging_config import setup_structured_logging, get_logger, log_environment_startup, log_error


def main():
    """Main application entry point"""
    try:
        config = Config()

        setup_structured_logging(config)
        logger = get_logger(__name__)

        context = runtime_context.initialize(config)
        log_environment_startup(logger, config, context)

        server = DiagnosticsServer(config, context=context)

        uvicorn.run(
            server.get_app(),
            host=config.diagnostics_host,
            port=config.diagnostics_port,
            log_config=None  # We handle logging ourselves
        )

    except Exception as e:
        logger = get_logger(__name__)
        log_error(logger, e, {"component": "main", "phase": "startup"})
        sys.exit(1)


if __name__ == '__main__':
    main()
