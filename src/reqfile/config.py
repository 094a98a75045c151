"""Parser configuration — where files live and what URLs start with.

A parser needs two pieces of context that the request files themselves
don't carry:

- **base_dir** — the directory every file name is resolved under, both
  the file being parsed and any body file it pulls in with ``<``.
- **base_url** — a prefix glued onto every URL found in a request line,
  so files can say ``GET /users`` instead of repeating the host.

Like process environment variables, configuration can also be read from
``KEY=VALUE`` pairs (``REQFILE_BASE_DIR``, ``REQFILE_BASE_URL``,
``REQFILE_ENCODING``).  Unset keys keep their defaults.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

ENV_BASE_DIR = "REQFILE_BASE_DIR"
ENV_BASE_URL = "REQFILE_BASE_URL"
ENV_ENCODING = "REQFILE_ENCODING"

DEFAULT_ENCODING = "utf-8"


def _current_dir() -> Path:
    """Return the default base directory (typed factory for dataclass fields)."""
    return Path()


@dataclass(frozen=True)
class ParserConfig:
    """Immutable settings shared by every parse call of one parser.

    Attributes:
        base_dir: Directory that file names are resolved against.
        base_url: Prefix prepended verbatim to every request-line URL.
        encoding: Text encoding for reading files and encoding bodies.

    """

    base_dir: Path = field(default_factory=_current_dir)
    base_url: str = ""
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ParserConfig":
        """Build a config from environment variables.

        Args:
            environ: The variables to read (defaults to ``os.environ``).

        Returns:
            A config with every set variable applied over the defaults.

        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            base_dir=Path(env.get(ENV_BASE_DIR, str(defaults.base_dir))),
            base_url=env.get(ENV_BASE_URL, defaults.base_url),
            encoding=env.get(ENV_ENCODING, defaults.encoding),
        )
