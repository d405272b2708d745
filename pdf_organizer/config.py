"""Runtime settings for the organizer engine, overridable from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

LOGGER = logging.getLogger("pdf_organizer.config")
ENV_PREFIX = "PDF_ORGANIZER_"


@dataclass(frozen=True)
class EngineSettings:
    """Tunables shared by ingestion, assembly, splitting and export."""

    thumbnail_scale: float = 0.3
    thumbnail_quality: int = 50
    export_scale: float = 2.0
    export_quality: int = 80
    export_batch_size: int = 2
    yield_every: int = 5
    yield_delay: float = 0.0
    output_prefix: str = "Carma"

    def __post_init__(self) -> None:
        if self.export_batch_size < 1:
            raise ValueError("export_batch_size must be >= 1")
        if self.yield_every < 1:
            raise ValueError("yield_every must be >= 1")
        for name in ("thumbnail_quality", "export_quality"):
            value = getattr(self, name)
            if not 1 <= value <= 100:
                raise ValueError(f"{name} must be between 1 and 100, got {value}")
        for name in ("thumbnail_scale", "export_scale"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")

    def with_overrides(self, **overrides: Any) -> "EngineSettings":
        """Return a copy with every non-``None`` override applied."""

        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Build settings from ``PDF_ORGANIZER_*`` variables.

        ``PDF_ORGANIZER_EXPORT_BATCH_SIZE=4`` overrides ``export_batch_size``
        and so on. Values that cannot be converted are ignored with a warning.
        """

        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field_info in fields(cls):
            raw = environ.get(ENV_PREFIX + field_info.name.upper())
            if raw is None:
                continue
            converter = _CONVERTERS.get(field_info.type, str)
            try:
                values[field_info.name] = converter(raw.strip())
            except ValueError:
                LOGGER.warning("Ignoring invalid value %r for %s", raw, field_info.name)
        return cls(**values)


# ``from __future__ import annotations`` turns field types into strings.
_CONVERTERS = {"float": float, "int": int, "str": str}


__all__ = ["EngineSettings", "ENV_PREFIX"]
