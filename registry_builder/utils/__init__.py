# Builder utilities
from .logging import (
    log, logWarning, logError, logDebug,
    init_logging, close_logging, print_summary, get_counts, get_log_path,
)
from .binary import (
    encode_varint, encode_string, varint_size,
    write_varint, write_string, read_varint, read_string,
)
from .naming import namespaced, resource_id, safe_filename, relative_text_parts
from .files import iter_definition_files
