"""reqfile — parse templated ``.http`` request files into request objects.

Re-exports public symbols so callers can write::

    from reqfile import Parser, ParserConfig

    parser = Parser(ParserConfig(base_dir=Path("requests"), base_url="https://"))
    request = parser.parse("get.http", {"Host": "httpbin.org"})
"""

from reqfile.body import HTTP_EOL, assemble_body, include_target
from reqfile.config import ParserConfig
from reqfile.errors import (
    BodyError,
    InvalidHeaderError,
    InvalidRequestFileError,
    InvalidRequestLineError,
    InvalidURLError,
    RequestFileError,
    TemplateError,
)
from reqfile.headers import Headers, canonical_name
from reqfile.logging import EventKind, EventLog, ParseEvent
from reqfile.parser import ParseContext, Parser
from reqfile.reader import UNIT_SEPARATOR, LineReader, ProtocolError, is_unit_separator
from reqfile.render import TemplateRenderer, template_context
from reqfile.request import (
    DEFAULT_METHOD,
    HttpMethod,
    RequestUnit,
    format_request,
    is_comment,
    parse_request_line,
    parse_url,
)

__all__ = [
    "DEFAULT_METHOD",
    "HTTP_EOL",
    "UNIT_SEPARATOR",
    "BodyError",
    "EventKind",
    "EventLog",
    "Headers",
    "HttpMethod",
    "InvalidHeaderError",
    "InvalidRequestFileError",
    "InvalidRequestLineError",
    "InvalidURLError",
    "LineReader",
    "ParseContext",
    "ParseEvent",
    "Parser",
    "ParserConfig",
    "ProtocolError",
    "RequestFileError",
    "RequestUnit",
    "TemplateError",
    "TemplateRenderer",
    "assemble_body",
    "canonical_name",
    "format_request",
    "include_target",
    "is_comment",
    "is_unit_separator",
    "parse_request_line",
    "parse_url",
    "template_context",
]
