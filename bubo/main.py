"""
bubo/main.py
============

Process entry point: bootstrap every client from the environment, then serve
the HTTP app with uvicorn.

    bubo-agent                                   # console script
    uvicorn bubo.main:build_app --factory        # or via uvicorn directly
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .api import create_app
from .config import Config
from .core import AgentFacade, BuboAgent
from .logging_setup import setup_logging
from .tool_definitions import build_registry
from .tools.toolkit import Toolkit

logger = logging.getLogger(__name__)


def build_app(config: Optional[Config] = None) -> FastAPI:
    """Bootstrap clients, tools and the agent, and return the FastAPI app.

    Any malformed credential raises here; there is no degraded startup mode.
    """
    config = config or Config.from_env()
    setup_logging(config.log_level)

    toolkit = Toolkit(config)
    registry = build_registry(toolkit)
    agent = BuboAgent(config, registry, error_handler=toolkit.error_handler)
    facade = AgentFacade(agent)

    logger.info("Tools registered: %s", ", ".join(registry.names()))
    return create_app(facade, toolkit)


def main() -> None:
    config = Config.from_env()
    app = build_app(config)
    logger.info("BuboAgent listening on %s:%d", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
