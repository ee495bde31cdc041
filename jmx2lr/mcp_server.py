"""MCP Server for the JMX to LoadRunner converter.

This module provides a Model Context Protocol (MCP) server that exposes
JMX to LoadRunner conversion to GitHub Copilot and other AI assistants.
"""

import asyncio
import json
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from jmx2lr.core.converter import JMXToLoadRunnerConverter, inspect_jmx
from jmx2lr.core.options import ConverterOptions
from jmx2lr.exceptions import Jmx2LrException

# Initialize MCP Server
app = Server("jmx-to-loadrunner")


def _json_response(payload: Dict[str, Any]) -> List[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload, indent=2))]


def _error_response(error: Exception) -> List[TextContent]:
    return _json_response(
        {"success": False, "error": str(error), "error_type": type(error).__name__}
    )


@app.list_tools()
async def list_tools() -> List[Tool]:
    """List available MCP tools for JMX conversion.

    Returns:
        List of available tools with their schemas
    """
    return [
        Tool(
            name="inspect_jmx_plan",
            description=(
                "Use this tool FIRST when user wants to convert a JMeter test plan to LoadRunner. "
                "Lists Thread Groups with the HTTP samplers, transaction controllers and "
                "Regex/JSON extractors that will be converted, plus CSV Data Set Configs."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "jmx_path": {
                        "type": "string",
                        "description": "Path to JMeter JMX file",
                    },
                },
                "required": ["jmx_path"],
            },
        ),
        Tool(
            name="convert_jmx_to_loadrunner",
            description=(
                "Convert a JMeter JMX test plan into LoadRunner Web/HTTP (VuGen) scripts. "
                "Creates one script folder per Thread Group with Action.c, vuser_init.c, "
                "vuser_end.c, default.cfg, parameters.prm, CSV/.dat data files and conversion.log. "
                "HTTP samplers become web_url/web_submit_data/web_custom_request, extractors "
                "become web_reg_save_param_ex/web_reg_save_param_json, ${var} becomes {var}."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "jmx_path": {
                        "type": "string",
                        "description": "Path to JMeter JMX file",
                    },
                    "output_dir": {
                        "type": "string",
                        "description": "Output folder for generated script folders",
                        "default": "lr_scripts",
                    },
                    "enable_correlation": {
                        "type": "boolean",
                        "description": "Convert Regex/JSON extractors (default: true)",
                        "default": True,
                    },
                    "write_dat_files": {
                        "type": "boolean",
                        "description": "Write .dat copies of CSV files (default: true)",
                        "default": True,
                    },
                    "script_prefix": {
                        "type": "string",
                        "description": "Prefix of script folder names (default: Script_)",
                        "default": "Script_",
                    },
                },
                "required": ["jmx_path"],
            },
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> List[TextContent]:
    """Dispatch MCP tool calls.

    Args:
        name: Tool name
        arguments: Tool arguments

    Returns:
        Tool response as text content
    """
    if name == "inspect_jmx_plan":
        return await _inspect_plan(arguments)
    elif name == "convert_jmx_to_loadrunner":
        return await _convert_jmx(arguments)
    else:
        raise ValueError(f"Unknown tool: {name}")


async def _inspect_plan(arguments: Dict[str, Any]) -> List[TextContent]:
    """Handle inspect_jmx_plan tool call."""
    try:
        jmx_path = arguments["jmx_path"]
        summary = inspect_jmx(jmx_path)

        response = {
            "success": True,
            **summary,
            "next_step": f"Use convert_jmx_to_loadrunner with jmx_path='{jmx_path}'",
        }
        return _json_response(response)

    except (KeyError, Jmx2LrException) as e:
        return _error_response(e)
    except Exception as e:
        return _error_response(e)


async def _convert_jmx(arguments: Dict[str, Any]) -> List[TextContent]:
    """Handle convert_jmx_to_loadrunner tool call."""
    try:
        jmx_path = arguments["jmx_path"]
        output_dir = arguments.get("output_dir", "lr_scripts")

        options = ConverterOptions.from_dict(
            {
                key: arguments[key]
                for key in ("enable_correlation", "write_dat_files", "script_prefix")
                if key in arguments
            },
            source="tool arguments",
        )

        result = JMXToLoadRunnerConverter(options).convert(jmx_path, output_dir)
        response = result.to_dict()
        if result.success:
            response["message"] = (
                f"Generated {len(result.scripts)} LoadRunner script(s) in {output_dir}"
            )
        return _json_response(response)

    except (KeyError, Jmx2LrException) as e:
        return _error_response(e)
    except Exception as e:
        return _error_response(e)


async def main() -> None:
    """Main entry point for MCP server.

    Starts the MCP server using stdio transport for communication
    with MCP clients like GitHub Copilot.
    """
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run_server() -> None:
    """Synchronous wrapper to run the MCP server.

    This is called from the CLI mcp command.
    """
    asyncio.run(main())


if __name__ == "__main__":
    run_server()
