"""Field names, parameter names and network defaults used by BRP tools."""

from __future__ import annotations

# JSON field names in BRP responses
JSON_FIELD_CODE = "code"
JSON_FIELD_COMPONENT = "component"
JSON_FIELD_COMPONENTS = "components"
JSON_FIELD_COUNT = "count"
JSON_FIELD_DATA = "data"
JSON_FIELD_DEBUG_INFO = "debug_info"
JSON_FIELD_DESTROYED_ENTITY = "destroyed_entity"
JSON_FIELD_ENTITIES = "entities"
JSON_FIELD_ENTITY = "entity"
JSON_FIELD_ERROR_CODE = "error_code"
JSON_FIELD_FORMAT_CORRECTIONS = "format_corrections"
JSON_FIELD_LOG_PATH = "log_path"
JSON_FIELD_METADATA = "metadata"
JSON_FIELD_METHOD = "method"
JSON_FIELD_ORIGINAL_ERROR = "original_error"
JSON_FIELD_PARENT = "parent"
JSON_FIELD_PATH = "path"
JSON_FIELD_PORT = "port"
JSON_FIELD_RESOURCE = "resource"
JSON_FIELD_RESOURCES = "resources"
JSON_FIELD_STATUS = "status"
JSON_FIELD_TIMEOUT_SECONDS = "timeout_seconds"
JSON_FIELD_VALUE = "value"
JSON_FIELD_WATCH_ID = "watch_id"
JSON_FIELD_WATCHES = "watches"

# Parameter names for BRP tool inputs
PARAM_TYPES = "types"
PARAM_METHOD = "method"
PARAM_PARAMS = "params"
PARAM_DATA = "data"
PARAM_FILTER = "filter"
PARAM_STRICT = "strict"
PARAM_FORMATS = "formats"
PARAM_WITH_CRATES = "with_crates"
PARAM_WITHOUT_CRATES = "without_crates"
PARAM_WITH_TYPES = "with_types"
PARAM_WITHOUT_TYPES = "without_types"
PARAM_ENTITIES = "entities"
PARAM_PARENT = "parent"
PARAM_RESULT = "result"
PARAM_ENTITY_COUNT = "entity_count"
PARAM_COMPONENT_COUNT = "component_count"
PARAM_QUERY_PARAMS = "query_params"
PARAM_SPAWNED_ENTITY = "spawned_entity"

# Network
BRP_JSONRPC_PATH = "/jsonrpc"
BRP_DEFAULT_HOST = "localhost"
BRP_HTTP_PROTOCOL = "http"
DESC_PORT = "The BRP port (default: 15702)"
DEFAULT_BRP_PORT = 15702
BRP_PORT_ENV_VAR = "BRP_PORT"

# Errors
BRP_ERROR_CODE_INVALID_REQUEST = -23402

# JSON-RPC
JSONRPC_VERSION = "2.0"
JSONRPC_DEFAULT_ID = 1
JSONRPC_FIELD = "jsonrpc"
JSONRPC_FIELD_ID = "id"
JSONRPC_FIELD_METHOD = "method"
JSONRPC_FIELD_PARAMS = "params"