from __future__ import annotations

import logging
import os
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import InvalidSettingsError

_LOGGER = logging.getLogger("sfzkit.config")

INDEXED_OPCODES_ENV = "SFZKIT_INDEXED_OPCODES"
REPORT_LEFTOVERS_ENV = "SFZKIT_REPORT_LEFTOVERS"

IndexedOpcodePolicy = Literal["last_wins", "accumulate"]

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class ParserSettings(BaseModel):
    """Parser behavior switches.

    `indexed_opcodes="last_wins"` keeps a single `(index, value)` pair per
    indexed key within a scope; `"accumulate"` keeps one value per index.
    """

    indexed_opcodes: IndexedOpcodePolicy = "last_wins"
    report_leftovers: bool = True

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ParserSettings:
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        policy = env.get(INDEXED_OPCODES_ENV)
        if policy:
            values["indexed_opcodes"] = policy.strip().lower()

        report = env.get(REPORT_LEFTOVERS_ENV)
        if report:
            flag = report.strip().lower()
            if flag in _FALSE_VALUES:
                values["report_leftovers"] = False
            elif flag in _TRUE_VALUES:
                values["report_leftovers"] = True
            else:
                raise InvalidSettingsError(f"Unknown {REPORT_LEFTOVERS_ENV} value: {report!r}")

        try:
            settings = cls.model_validate(values)
        except ValidationError as exc:
            raise InvalidSettingsError(f"Invalid parser settings: {exc}") from exc
        _LOGGER.debug("Parser settings from environment: %s", settings)
        return settings
