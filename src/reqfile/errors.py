"""Error taxonomy for request file parsing.

Every failure the parser can report belongs to one closed family of
exceptions rooted at ``RequestFileError``.  Each one names the file it
was raised for, so a caller juggling dozens of ``.http`` files can tell
at a glance where the problem lives:

- **TemplateError** — the file could not be rendered.
- **InvalidRequestFileError** — rendering worked but no request was found.
- **InvalidRequestLineError** — the request line has the wrong shape.
- **InvalidURLError** — the URL field is not a valid URL.
- **InvalidHeaderError** — the header block is not valid MIME syntax.
- **BodyError** — the body could not be assembled.

The underlying exception is kept on ``cause`` and is also chained as
``__cause__`` by the ``raise ... from`` at each raise site.
"""

_REQUEST_LINE_SHAPES = "URL, METHOD URL or METHOD URL PROTO"


class RequestFileError(Exception):
    """Base class for all request file errors.

    Attributes:
        file: The resolved path of the offending file.
        cause: The underlying exception, if any.

    """

    def __init__(self, msg: str, *, file: str, cause: BaseException | None = None) -> None:
        """Create an error for *file* with a formatted message."""
        super().__init__(msg)
        self.file = file
        self.cause = cause


class TemplateError(RequestFileError):
    """Raise when a file cannot be located, compiled, or rendered."""

    def __init__(self, file: str, cause: BaseException) -> None:
        """Wrap a rendering failure of *file*."""
        msg = f"failed to process template file '{file}': {cause}"
        super().__init__(msg, file=file, cause=cause)


class InvalidRequestFileError(RequestFileError):
    """Raise when a file holds no request line at all."""

    def __init__(self, file: str, cause: BaseException) -> None:
        """Report that *file* ran out of input before a request line."""
        msg = f"failed to find any request in '{file}': {cause}"
        super().__init__(msg, file=file, cause=cause)


class InvalidRequestLineError(RequestFileError):
    """Raise when a request line does not have one, two, or three fields."""

    def __init__(self, file: str, line: str) -> None:
        """Report the literal offending *line* of *file*."""
        msg = f"invalid request line in '{file}': expected '{_REQUEST_LINE_SHAPES}', got '{line}'"
        super().__init__(msg, file=file)
        self.line = line


class InvalidURLError(RequestFileError):
    """Raise when the (prefixed) URL of a request line fails to parse."""

    def __init__(self, file: str, url: str, cause: BaseException) -> None:
        """Report the resolved *url* string and why it was rejected."""
        msg = f"failed to parse URL '{url}' in '{file}': {cause}"
        super().__init__(msg, file=file, cause=cause)
        self.url = url


class InvalidHeaderError(RequestFileError):
    """Raise when the header block is not valid MIME header syntax."""

    def __init__(self, file: str, cause: BaseException) -> None:
        """Wrap a header syntax failure in *file*."""
        msg = f"invalid header in '{file}': {cause}"
        super().__init__(msg, file=file, cause=cause)


class BodyError(RequestFileError):
    """Raise when the request body cannot be assembled."""

    def __init__(self, file: str, cause: BaseException) -> None:
        """Wrap a body assembly failure in *file*."""
        msg = f"failed to parse body in '{file}': {cause}"
        super().__init__(msg, file=file, cause=cause)
