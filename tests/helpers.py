"""Test doubles shared across the unit tests."""

import json
from typing import Any, Dict, List

import httpx

from multi_provider_mcp.core.provider import BaseProvider
from multi_provider_mcp.registry.tools import ToolDefinition, text_result


class RecordingBackend:
    """httpx.MockTransport handler that records requests and replays a canned response."""

    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self.body = body if body is not None else {"status": "ok"}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last_request.content)


class StaticProvider(BaseProvider):
    """Provider whose tools record their calls and answer '<provider>:<tool>'."""

    def __init__(self, name: str, tools: List[str], enabled: bool = True):
        super().__init__(name, enabled=enabled)
        self.calls: List[tuple] = []
        self.initialize_calls = 0
        for tool in tools:
            self.register_tool(
                tool,
                ToolDefinition(name=tool, description=f"{tool} from {name}"),
                self._make_handler(tool)
            )

    def _make_handler(self, tool: str):
        async def handler(args: Dict[str, Any]):
            self.calls.append((tool, args))
            return text_result(f"{self.name}:{tool}")
        return handler

    async def on_initialize(self):
        self.initialize_calls += 1


class FailingInitProvider(StaticProvider):
    """Provider whose startup always fails."""

    async def on_initialize(self):
        raise RuntimeError("backend unreachable")
