"""mcpserve - capability registry and dispatch engine for MCP servers."""

__version__ = "0.1.0"

from .config import ServerConfig
from .dispatcher import Dispatcher
from .docstring import extract_schema_from_docstring, schema_from_type
from .endpoints import Endpoints
from .errors import (
    CapabilityError,
    CapabilityKind,
    InvalidIdentifierError,
    InvocationTimeout,
    McpError,
    NotFoundError,
    RegistrationError,
    RegistryFrozenError,
    RequestError,
    SchemaCompileError,
    SchemaViolationError,
    SerializationError,
    ToolError,
)
from .executor import TimeoutExecutor
from .prompts import FunctionPrompt, Prompt
from .registry import CapabilityRegistry
from .resources import FunctionResource, Resource
from .response import McpResponse, StatusCode
from .schema import (
    compile_schema,
    generate_function_input_schema,
    python_type_to_json_schema,
    validate_against_schema,
)
from .server import McpServer
from .tools import FunctionTool, Tool
from .utils import (
    extract_bool,
    extract_bool_opt,
    extract_integer,
    extract_integer_opt,
    extract_number,
    extract_number_opt,
    extract_string,
    extract_string_opt,
)
from .validation import validate_prompt_name, validate_resource_uri, validate_tool_name

__all__ = [
    "McpServer",
    "ServerConfig",
    "CapabilityRegistry",
    "Dispatcher",
    "Endpoints",
    "TimeoutExecutor",
    "Tool",
    "FunctionTool",
    "Resource",
    "FunctionResource",
    "Prompt",
    "FunctionPrompt",
    "McpResponse",
    "StatusCode",
    "CapabilityKind",
    "McpError",
    "RequestError",
    "InvalidIdentifierError",
    "NotFoundError",
    "SchemaViolationError",
    "SchemaCompileError",
    "CapabilityError",
    "InvocationTimeout",
    "SerializationError",
    "RegistrationError",
    "RegistryFrozenError",
    "ToolError",
    "validate_tool_name",
    "validate_prompt_name",
    "validate_resource_uri",
    "extract_schema_from_docstring",
    "schema_from_type",
    "python_type_to_json_schema",
    "generate_function_input_schema",
    "compile_schema",
    "validate_against_schema",
    "extract_string",
    "extract_string_opt",
    "extract_number",
    "extract_number_opt",
    "extract_integer",
    "extract_integer_opt",
    "extract_bool",
    "extract_bool_opt",
    "__version__",
]
