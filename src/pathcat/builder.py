"""URL assembly: placeholder substitution and query string append.

The template is copied into a working buffer, ``:name`` placeholders are
replaced in place with values from the flattened parameters, and whatever
parameters remain are appended as the query string.
"""

from typing import Any

from .buffer import BufferPool, UrlBuffer, get_buffer_pool
from .config import ArrayFormat, PathCatConfig
from .exceptions import BufferOverflowError, InvalidTemplateError
from .flattener import flatten, is_sequence
from .formatting import format_boolean, render_element, render_value
from .log_config import BuildLogContext, get_context_logger
from .settings import get_default_config
from .types import ParameterMap
from .validation import is_well_formed_uri


PLACEHOLDER_PREFIX = ":"
QUERY_START = "?"
QUERY_SEPARATOR = "&"
KEY_VALUE_SEPARATOR = "="

logger = get_context_logger("pathcat.builder")


def _is_placeholder_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def build_url(
    path_or_url: str,
    parameters: Any = None,
    config: PathCatConfig | None = None,
    *,
    pool: BufferPool | None = None,
) -> str:
    """
    Build a URL from a template and structured parameters.

    Placeholders of the form ``:name`` are replaced by the matching
    parameter (case-insensitively); the remaining parameters are appended
    as the query string.

    Args:
        path_or_url: Absolute or relative URL template
        parameters: Arbitrary structured value, mapping or None
        config: Build configuration (process defaults when None)
        pool: Buffer pool to borrow the working buffer from

    Returns:
        The assembled URL

    Raises:
        InvalidTemplateError: If the template is not a well-formed URI reference
        BufferOverflowError: If the URL does not fit into ``config.buffer_size``

    Examples:
        >>> build_url("/users/:id", {"id": 123, "filter": "active"})
        '/users/123?filter=active'
    """
    if not is_well_formed_uri(path_or_url):
        logger.warning("Rejected malformed URL template", template=str(path_or_url)[:200])
        raise InvalidTemplateError(
            "The path or URL is not well-formed.", template=str(path_or_url)
        )

    conf = config if config is not None else get_default_config()
    buffer_pool = pool if pool is not None else get_buffer_pool(conf.buffer_size)

    with BuildLogContext(operation="build_url"), buffer_pool.checkout() as buffer:
        try:
            buffer.append(path_or_url)

            if parameters is not None:
                params = flatten(parameters, conf)
                substituted = _replace_placeholders(buffer, params, conf)
                query_pairs = _append_query_parameters(buffer, params, conf)
                logger.debug(
                    "URL parameters applied",
                    template=path_or_url,
                    substituted=substituted,
                    query_pairs=query_pairs,
                )
        except BufferOverflowError as e:
            logger.warning(
                "URL exceeds buffer capacity",
                template=path_or_url,
                capacity=e.capacity,
                required=e.required,
            )
            raise

        url = buffer.getvalue()

    logger.debug("URL built", length=len(url))
    return url


def _replace_placeholders(
    buffer: UrlBuffer, params: ParameterMap, config: PathCatConfig
) -> list[str]:
    """Substitute ``:name`` tokens in a single left-to-right pass.

    Tokens whose parameter renders to an empty string are left in place and
    the parameter stays eligible for the query string.
    """
    substituted: list[str] = []
    i = 0
    while i < len(buffer):
        if buffer[i] != PLACEHOLDER_PREFIX:
            i += 1
            continue

        start = i
        i += 1
        while i < len(buffer) and _is_placeholder_char(buffer[i]):
            i += 1
        name = "".join(buffer[j] for j in range(start + 1, i))

        if name not in params:
            continue

        text = render_value(params[name], config)
        if not text:
            continue

        buffer.splice(start, i, text)
        i = start + len(text)
        del params[name]
        substituted.append(name)

    return substituted


def _append_query_parameters(
    buffer: UrlBuffer, params: ParameterMap, config: PathCatConfig
) -> int:
    """Append remaining parameters as ``?k=v&k=v``; returns the pair count."""
    count = 0

    def append_pair(key: str, value: str) -> None:
        nonlocal count
        buffer.append(QUERY_SEPARATOR if count else QUERY_START)
        buffer.append(key)
        buffer.append(KEY_VALUE_SEPARATOR)
        buffer.append(value)
        count += 1

    for key, value in params.items():
        if is_sequence(value):
            items = [render_element(item) for item in value]
            if config.array_format == ArrayFormat.DELIMITED:
                append_pair(key, config.array_delimiter.join(items))
            elif config.array_format == ArrayFormat.INDEXED:
                for index, item in enumerate(items):
                    append_pair(f"{key}[{index}]", item)
            else:
                for item in items:
                    append_pair(key, item)
        elif isinstance(value, bool):
            append_pair(key, format_boolean(value, config.boolean_format))
        else:
            append_pair(key, render_value(value, config))

    return count


__all__ = ["build_url"]
