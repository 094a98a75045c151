"""Template rendering — fill placeholders in a request file before parsing.

Request files are Jinja2 templates.  A file such as::

    GET {{ Host }}/get

rendered with ``{"Host": "httpbin.org"}`` becomes ``GET httpbin.org/get``
and only then is handed to the line parser.

Every call builds its own ``jinja2.Environment``, so nothing compiled for
one call leaks into the next: re-rendering the same file with different
data always re-executes the template.  Undefined names are an error
(``StrictUndefined``) rather than a silent empty string.

Output keeps the line endings of the file: a CRLF file renders as CRLF
text, an LF file as LF text.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import jinja2

from reqfile.config import DEFAULT_ENCODING
from reqfile.errors import TemplateError


def template_context(data: object) -> dict[str, Any]:
    """Turn caller data into template variables.

    A mapping is used as-is.  Any other object exposes its public
    attributes, so dataclasses and simple namespaces work too.
    """
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return {str(key): value for key, value in data.items()}
    return {name: getattr(data, name) for name in dir(data) if not name.startswith("_")}


def _newline_of(source: str) -> Literal["\n", "\r\n"]:
    """Return the terminator of the first line of *source* (LF when none)."""
    line, sep, _ = source.partition("\n")
    if sep and line.endswith("\r"):
        return "\r\n"
    return "\n"


class TemplateRenderer:
    """Render files under a base directory against caller data."""

    def __init__(self, base_dir: Path | str, encoding: str = DEFAULT_ENCODING) -> None:
        """Create a renderer rooted at *base_dir*.

        Args:
            base_dir: Directory every file name is resolved under.
            encoding: Text encoding of the template files.

        """
        self._base_dir = Path(base_dir)
        self._encoding = encoding

    @property
    def base_dir(self) -> Path:
        """Return the directory file names are resolved under."""
        return self._base_dir

    def resolve(self, file_name: str) -> Path:
        """Return the path *file_name* refers to under the base directory."""
        return self._base_dir / file_name.lstrip("/")

    def render(self, file_name: str, data: object = None) -> str:
        """Render *file_name* with *data* and return the resulting text.

        Args:
            file_name: Name of the file, relative to the base directory.
            data: Mapping or object supplying the template variables.

        Returns:
            The fully rendered text.

        Raises:
            TemplateError: If the file is missing or unreadable, fails to
                compile, or references an undefined variable.

        """
        loader = jinja2.FileSystemLoader(self._base_dir, encoding=self._encoding)
        env = jinja2.Environment(
            loader=loader,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        try:
            source, _, _ = loader.get_source(env, file_name)
            env = env.overlay(newline_sequence=_newline_of(source))
            template = env.from_string(source)
            return template.render(template_context(data))
        except (jinja2.TemplateError, OSError, UnicodeDecodeError, LookupError) as e:
            raise TemplateError(str(self.resolve(file_name)), e) from e
