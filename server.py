#!/usr/bin/env python3
"""
YouTube Tag Generator server.
Serves the generateTags tool as JSON-RPC over a WebSocket.
"""

import json
import logging
import os
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from config import Settings
from errors import JsonRpcError
from logging_config import setup_logging
from rpc_handler import INTERNAL_ERROR, TagRpcHandler, error_response

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, handler: Optional[TagRpcHandler] = None) -> FastAPI:
    """Create the FastAPI application with the WebSocket endpoint and a health check."""
    settings = settings or Settings()
    handler = handler or TagRpcHandler(settings)

    app_instance = FastAPI(
        title=settings.agent_name,
        description="Generates optimized YouTube tags for video discoverability",
        version=settings.version,
    )

    @app_instance.get("/health")
    def health() -> dict:
        return handler.handle_ping()

    @app_instance.websocket("/")
    async def tag_socket(websocket: WebSocket) -> None:
        await websocket.accept()
        logger.info("Client connected")

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break

                payload = message.get("text")
                if payload is None:
                    payload = message.get("bytes") or b""

                try:
                    response = handler.handle_message(payload)
                except Exception as e:
                    logger.exception("Unexpected error handling message")
                    response = error_response(JsonRpcError(INTERNAL_ERROR, str(e)), None)
                await websocket.send_text(json.dumps(response))
        except WebSocketDisconnect:
            pass

        logger.info("Client disconnected")

    return app_instance


class TagServer(uvicorn.Server):
    """uvicorn server that exits right away on SIGINT/SIGTERM, without draining."""

    def handle_exit(self, sig: int, frame) -> None:
        logger.info(f"Signal {sig} received: closing WebSocket server")
        logging.shutdown()
        os._exit(0)


def main() -> int:
    settings = Settings()
    setup_logging(settings)

    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )

    logger.info(f"{settings.agent_name} MCP server running on port {settings.port}")
    if settings.environment == "production":
        logger.info(f"Published WebSocket URL: {settings.websocket_url}")
    else:
        logger.info(f"Dev WebSocket URL: {settings.websocket_url}")

    TagServer(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
