"""
Perplexity Sonar MCP Server.

Transport: stdio only (launched by the MCP client).

Tools return plain text. Failures surface as MCP tool errors:
    "Unknown tool: <name>"             unknown operation
    "Perplexity API error: <message>"  backend failure
"""

import argparse
import logging
import signal
import sys
from typing import Annotated, List, Optional, Union

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import Field

from sonar_router.common import (
    BackendError,
    BackendSettings,
    CompletionClient,
    ConfigError,
    UnknownOperationError,
    load_config,
    require_api_key,
)
from sonar_router.routing import Dispatcher, Operation

logger = logging.getLogger("sonar.mcp")
load_dotenv()


class SonarMCPServerApp:
    """
    Main application class for the MCP server.

    Exposes search, reason and deep_research. An unforced search may be
    promoted to reason or deep_research depending on the query.
    """
    def __init__(
            self,
            dispatcher: Dispatcher,
            mcp_server_name: str = "perplexity-server",
        ) -> None:
        """
        Args:
            dispatcher (Dispatcher): Routes queries to the completion backend.
            mcp_server_name (str): The name of the MCP server.
        """
        self.dispatcher = dispatcher
        self.mcp = FastMCP(name=mcp_server_name)

        # ---------- MCP Tools: Search ---------- #
        @self.mcp.tool(
            name="search",
            description=(
                "Quick search for simple queries using Perplexity's Sonar Pro model. "
                "Best for straightforward questions and basic information lookup. "
                "Complex or research-style queries are automatically routed to a "
                "stronger model unless force_model is set."
            ),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False, openWorldHint=True)
        )
        async def tool_search(
            query: Annotated[str, Field(description="The search query or question")],
            force_model: Annotated[bool, Field(description="Force using this model even if the query seems complex")] = False,
        ) -> str:
            return await self.call_operation(Operation.SEARCH, query, force_model=force_model)

        # ---------- MCP Tools: Reason ---------- #
        @self.mcp.tool(
            name="reason",
            description=(
                "Handles complex, multi-step tasks using Perplexity's Sonar Reasoning Pro model. "
                "Best for explanations, comparisons, and problem-solving."
            ),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False, openWorldHint=True)
        )
        async def tool_reason(
            query: Annotated[str, Field(description="The complex query or task to reason about")],
            force_model: Annotated[bool, Field(description="Force using this model even if the query seems simple or research-oriented")] = False,
        ) -> str:
            return await self.call_operation(Operation.REASON, query, force_model=force_model)

        # ---------- MCP Tools: Deep Research ---------- #
        @self.mcp.tool(
            name="deep_research",
            description=(
                "Conducts in-depth analysis and generates detailed reports using Perplexity's "
                "Sonar Deep Research model. Best for comprehensive research topics."
            ),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False, openWorldHint=True)
        )
        async def tool_deep_research(
            query: Annotated[str, Field(description="The research topic or question to investigate in depth")],
            focus_areas: Annotated[Optional[List[str]], Field(description="Specific aspects or areas to focus on")] = None,
            force_model: Annotated[bool, Field(description="Force using this model even if the query seems simple")] = False,
        ) -> str:
            return await self.call_operation(
                Operation.DEEP_RESEARCH, query, force_model=force_model, focus_areas=focus_areas
            )

    async def call_operation(
        self,
        name: Union[str, Operation],
        query: str,
        force_model: bool = False,
        focus_areas: Optional[List[str]] = None,
    ) -> str:
        """
        Run an operation through the dispatcher and map routing errors
        to MCP tool errors. Other exceptions propagate unchanged.
        """
        logger.info("MCP tool called: %s", getattr(name, "value", name))
        try:
            return await self.dispatcher.dispatch(
                name, query, force_model=force_model, focus_areas=focus_areas
            )
        except UnknownOperationError as exc:
            raise ToolError(str(exc)) from exc
        except BackendError as exc:
            raise ToolError(f"Perplexity API error: {exc.message}") from exc

    def run(self) -> None:
        """Runs the MCP server using stdio transport."""
        logger.info("Perplexity MCP server running on stdio")
        self.mcp.run(transport="stdio")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Perplexity Sonar MCP server (stdio).")
    parser.add_argument(
        "--api-key",
        default=None,
        help="Perplexity API key (overrides PERPLEXITY_API_KEY and sonar.config.json).",
    )
    parser.add_argument(
        "--server-name",
        default=None,
        help="Advertised MCP server name.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Perplexity API base URL.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Backend request timeout in seconds.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level (logs go to stderr).",
    )
    args = parser.parse_args()

    config = load_config(api_key=args.api_key)
    if args.server_name:
        config.server.name = args.server_name
    if args.base_url:
        config.perplexity.base_url = args.base_url
    if args.timeout:
        config.perplexity.timeout = args.timeout
    if args.log_level:
        config.server.log_level = args.log_level

    # stdout carries the MCP protocol
    logging.basicConfig(
        level=getattr(logging, config.server.log_level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        api_key = require_api_key(config)
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)
    logger.info("Using Perplexity API key from %s", config.api_key_source)

    client = CompletionClient(
        BackendSettings(
            api_key=api_key,
            base_url=config.perplexity.base_url,
            timeout=config.perplexity.timeout,
        )
    )
    app = SonarMCPServerApp(
        dispatcher=Dispatcher(client),
        mcp_server_name=config.server.name,
    )

    def _handle_shutdown(signum, frame):
        raise SystemExit(0)
    for sig in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
        if sig is not None:
            signal.signal(sig, _handle_shutdown)

    app.run()


if __name__ == "__main__":
    main()
