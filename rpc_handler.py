"""
JSON-RPC request handling for the YouTube Tag Generator.
Transport-independent: takes a raw message, returns the response dict.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError

from config import Settings
from errors import InvalidInputError, JsonRpcError
from models import DEFAULT_CONSTRAINTS, GenerateTagsArguments, TagConstraints
from tag_optimizer import DEFAULT_MAX_TAGS, format_timestamp, generate_tags

logger = logging.getLogger(__name__)

# ===================== JSON-RPC ERROR CODES =====================
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

GENERATE_TAGS_TOOL = "generateTags"

TOOL_DEFINITIONS = [
    {
        "name": GENERATE_TAGS_TOOL,
        "description": "Generate optimized YouTube tags based on analyzed keywords",
        "inputSchema": {
            "type": "object",
            "properties": {
                "concept": {
                    "type": "string",
                    "description": "The video concept/topic"
                },
                "title": {
                    "type": "string",
                    "description": "The video title"
                },
                "keywords": {
                    "type": "object",
                    "description": "Analyzed keywords with recommendations"
                },
                "channelName": {
                    "type": "string",
                    "description": "Channel name for branded tags"
                },
                "niche": {
                    "type": "string",
                    "description": "Content niche"
                },
                "maxTags": {
                    "type": "number",
                    "default": DEFAULT_MAX_TAGS,
                    "description": "Maximum number of tags to generate"
                },
                "includeMisspellings": {
                    "type": "boolean",
                    "default": True,
                    "description": "Include common misspellings"
                }
            },
            "required": ["concept", "keywords"]
        }
    }
]


def success_response(result: Any, request_id: Any) -> Dict:
    return {"jsonrpc": "2.0", "result": result, "id": request_id}


def error_response(error: JsonRpcError, request_id: Any) -> Dict:
    return {"jsonrpc": "2.0", "error": error.to_dict(), "id": request_id}


def describe_validation_error(error: ValidationError) -> str:
    """Turn a pydantic ValidationError into a one-line message for the client."""
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "arguments"
        problems.append(f"{location}: {detail.get('msg', 'invalid value')}")
    return "Invalid arguments - " + "; ".join(problems)


class TagRpcHandler:
    """
    Dispatches JSON-RPC requests to the tag generator.

    Holds only read-only configuration, so one handler can serve every
    connection at once.
    """

    def __init__(
        self,
        settings: Settings,
        constraints: TagConstraints = DEFAULT_CONSTRAINTS,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.settings = settings
        self.constraints = constraints
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def handle_message(self, message: Union[str, bytes]) -> Dict:
        """
        Handle one raw inbound message.

        Args:
            message: UTF-8 JSON text of a single request

        Returns:
            The JSON-RPC response dict (never raises)
        """
        try:
            request = json.loads(message)
        except (ValueError, RecursionError):
            logger.warning("Received a message that is not valid JSON")
            return error_response(JsonRpcError(PARSE_ERROR, "Parse error"), None)

        if not isinstance(request, dict):
            return error_response(JsonRpcError(INVALID_REQUEST, "Invalid Request"), None)

        logger.info(f"Received: {request.get('method')}")
        return self.handle_request(request)

    def handle_request(self, request: Dict) -> Dict:
        method = request.get("method")
        params = request.get("params")
        request_id = request.get("id")

        try:
            if method == "ping":
                return success_response(self.handle_ping(), request_id)
            if method == "tools/list":
                return success_response(self.handle_tools_list(), request_id)
            if method == "tools/call":
                return success_response(self.handle_tool_call(params), request_id)
            raise JsonRpcError(METHOD_NOT_FOUND, f"Method not found: {method}")
        except JsonRpcError as e:
            return error_response(e, request_id)
        except Exception as e:
            logger.exception(f"Unexpected error handling {method}")
            return error_response(JsonRpcError(INTERNAL_ERROR, str(e)), request_id)

    def handle_ping(self) -> Dict:
        return {
            "status": "ok",
            "agent": self.settings.agent_name,
            "version": self.settings.version,
            "timestamp": format_timestamp(self.clock())
        }

    def handle_tools_list(self) -> Dict:
        return {"tools": TOOL_DEFINITIONS}

    def handle_tool_call(self, params: Optional[Dict]) -> Dict:
        """
        Run a tool and wrap its output as ``{"content": ...}``.

        Raises:
            JsonRpcError: INVALID_PARAMS for an unknown tool, INTERNAL_ERROR when
                the tool rejects its arguments
        """
        params = params if isinstance(params, dict) else {}
        name = params.get("name")

        if name != GENERATE_TAGS_TOOL:
            raise JsonRpcError(INVALID_PARAMS, f"Unknown tool: {name}")

        try:
            arguments = GenerateTagsArguments.model_validate(params.get("arguments") or {})
            result = generate_tags(
                arguments.concept,
                title=arguments.title,
                keywords=arguments.keywords,
                channel_name=arguments.channel_name,
                niche=arguments.niche,
                max_tags=arguments.max_tags,
                include_misspellings=arguments.include_misspellings,
                now=self.clock(),
                constraints=self.constraints
            )
        except ValidationError as e:
            raise JsonRpcError(INTERNAL_ERROR, describe_validation_error(e)) from e
        except InvalidInputError as e:
            raise JsonRpcError(INTERNAL_ERROR, str(e)) from e

        return {"content": result}
