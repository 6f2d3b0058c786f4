"""Parser options and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class OnError(Enum):
    RAISE = "raise"   # grammar violation -> ParseError
    ABORT = "abort"   # grammar violation -> logged, SystemExit


@dataclass(frozen=True)
class ParserOptions:
    """Knobs shared by loading and parsing."""

    on_error: OnError = OnError.RAISE
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ParserOptions":
        """Build options from ``FLATYAML_ON_ERROR`` / ``FLATYAML_ENCODING``.

        Unset variables keep the defaults. An unknown policy name raises
        ``ValueError``.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        raw_policy = env.get("FLATYAML_ON_ERROR", "").strip().lower()
        if raw_policy:
            try:
                on_error = OnError(raw_policy)
            except ValueError:
                choices = ", ".join(p.value for p in OnError)
                raise ValueError(
                    f"FLATYAML_ON_ERROR must be one of {choices}, got {raw_policy!r}"
                ) from None
        else:
            on_error = defaults.on_error

        encoding = env.get("FLATYAML_ENCODING", "").strip() or defaults.encoding
        return cls(on_error=on_error, encoding=encoding)
