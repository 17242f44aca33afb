"""Environment bindings for handlers and build-time rendering.

Handlers receive configuration (API keys, upstream URLs) through the
``env`` field of their ``RequestContext`` instead of reading
``os.environ``. Variables whose names carry the public prefix are the
only ones exposed to static rendering::

    env = EnvBindings.from_environ()
    env["API_TOKEN"]           # server-side only
    env.public()["PUBLIC_URL"]  # also visible to templates
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from petrel.errors import ConfigurationError


class EnvBindings(Mapping[str, str]):
    """Immutable snapshot of string configuration values."""

    __slots__ = ("_public_prefix", "_values")

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        *,
        public_prefix: str = "PUBLIC_",
    ) -> None:
        self._values = MappingProxyType(dict(values or {}))
        self._public_prefix = public_prefix

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        public_prefix: str = "PUBLIC_",
    ) -> EnvBindings:
        """Snapshot ``os.environ`` (or *environ*) into a new binding set."""
        source = os.environ if environ is None else environ
        return cls(dict(source), public_prefix=public_prefix)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        # Values may be secrets; show names only.
        return f"EnvBindings({sorted(self._values)!r})"

    @property
    def public_prefix(self) -> str:
        return self._public_prefix

    def is_public(self, name: str) -> bool:
        """True if *name* is flagged for exposure to static rendering."""
        return bool(self._public_prefix) and name.startswith(self._public_prefix)

    def public(self) -> EnvBindings:
        """Return only the variables flagged public."""
        return EnvBindings(
            {k: v for k, v in self._values.items() if self.is_public(k)},
            public_prefix=self._public_prefix,
        )

    def require(self, name: str) -> str:
        """Return the value for *name* or raise ``ConfigurationError``."""
        try:
            return self._values[name]
        except KeyError:
            msg = f"Missing required environment variable {name!r}"
            raise ConfigurationError(msg) from None
