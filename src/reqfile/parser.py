"""Parser facade — turn a request file into request units.

Parsing a file is a two-stage pipeline:

1. **Render** the file as a template against the caller's data.
2. **Parse** the rendered text, one request unit at a time.

Each unit walks the same states::

    Start → SeekRequestLine → RequestLineParsed → HeaderBlock
          → BodyAccumulation → UnitComplete

Comments and blank lines are skipped while seeking the request line.
Running out of input right after the request line or the header block
is fine: the unit simply has no headers and/or no body.  Any error
aborts the whole call; a half-built unit is never returned.

A file can hold several requests separated by ``###`` lines::

    GET /first

    ###
    POST /second
    Content-Type: text/plain

    hello

``parse`` returns the first request, ``parse_all`` returns them all.
"""

from dataclasses import dataclass, replace

from reqfile.body import assemble_body
from reqfile.config import ParserConfig
from reqfile.errors import InvalidHeaderError, InvalidRequestFileError
from reqfile.logging import EventKind, EventLog
from reqfile.reader import LineReader, ProtocolError
from reqfile.render import TemplateRenderer
from reqfile.request import RequestUnit, is_comment, parse_request_line


@dataclass(frozen=True)
class ParseContext:
    """Per-call state, fixed for the duration of one parse.

    Attributes:
        config: The parser settings (base directory, base URL, encoding).
        file_name: The file name the caller asked for.
        path: The file name resolved under the base directory.
        data: The template data shared by the file and its includes.

    """

    config: ParserConfig
    file_name: str
    path: str
    data: object = None


class Parser:
    """Parse request files under a base directory."""

    def __init__(self, config: ParserConfig | None = None, *, log: EventLog | None = None) -> None:
        """Create a parser.

        Args:
            config: Base directory, base URL, and encoding (defaults apply
                when omitted).
            log: Optional record of rendered files, includes, and parsed units.

        """
        self._config = config if config is not None else ParserConfig()
        self._event_log = log

    @property
    def config(self) -> ParserConfig:
        """Return the parser configuration."""
        return self._config

    def parse(self, file_name: str, data: object = None) -> RequestUnit:
        """Parse the first request of *file_name*.

        Args:
            file_name: The request file, relative to the base directory.
            data: Mapping or object supplying the template variables.

        Returns:
            The first request unit in the file.

        Raises:
            RequestFileError: Any member of the error taxonomy.

        """
        ctx, reader, renderer = self._open(file_name, data)
        return self._parse_unit(ctx, reader, renderer, index=1)

    def parse_all(self, file_name: str, data: object = None) -> list[RequestUnit]:
        """Parse every request of *file_name* in file order.

        Raises:
            InvalidRequestFileError: If the file holds no request at all.
            RequestFileError: Any other member of the error taxonomy.

        """
        ctx, reader, renderer = self._open(file_name, data)
        units = [self._parse_unit(ctx, reader, renderer, index=1)]
        while _skip_to_request_line(reader):
            units.append(self._parse_unit(ctx, reader, renderer, index=len(units) + 1))
        return units

    def _open(self, file_name: str, data: object) -> tuple[ParseContext, LineReader, TemplateRenderer]:
        """Render *file_name* and wrap the text in a fresh reader."""
        renderer = TemplateRenderer(self._config.base_dir, self._config.encoding)
        ctx = ParseContext(
            config=self._config,
            file_name=file_name,
            path=str(renderer.resolve(file_name)),
            data=data,
        )
        text = renderer.render(file_name, data)
        self._record(EventKind.RENDERED, ctx.path, f"{len(text)} characters")
        return ctx, LineReader(text), renderer

    def _parse_unit(
        self,
        ctx: ParseContext,
        reader: LineReader,
        renderer: TemplateRenderer,
        *,
        index: int,
    ) -> RequestUnit:
        """Run one request-line → headers → body cycle."""
        if not _skip_to_request_line(reader):
            msg = "no request found in file"
            raise InvalidRequestFileError(ctx.path, EOFError(msg))

        line = reader.next_logical_line()
        unit = parse_request_line(line, base_url=ctx.config.base_url, file=ctx.path)
        if reader.at_end:
            return self._complete(ctx, unit, index)

        try:
            headers = reader.read_header_block()
        except ProtocolError as e:
            raise InvalidHeaderError(ctx.path, e) from e
        if reader.at_end:
            return self._complete(ctx, replace(unit, headers=headers), index)

        def include(name: str) -> str:
            self._record(EventKind.INCLUDED, ctx.path, name, index)
            return renderer.render(name, ctx.data)

        body = assemble_body(reader, include, file=ctx.path, encoding=ctx.config.encoding)
        return self._complete(ctx, replace(unit, headers=headers, body=body), index)

    def _complete(self, ctx: ParseContext, unit: RequestUnit, index: int) -> RequestUnit:
        """Record a finished unit and hand it back."""
        self._record(EventKind.PARSED, ctx.path, f"{unit.method} {unit.url}", index)
        return unit

    def _record(self, kind: EventKind, file: str, detail: str, unit: int = 0) -> None:
        """Append an event to the event log, if one is attached."""
        if self._event_log is not None:
            self._event_log.record(kind, file, detail, unit=unit)


def _skip_to_request_line(reader: LineReader) -> bool:
    """Skip blank and comment lines; return True if a request line follows."""
    while True:
        line = reader.peek_raw_line()
        if line is None:
            return False
        if not line.strip():
            reader.next_raw_line()
        elif is_comment(line):
            reader.next_logical_line()
        else:
            return True
