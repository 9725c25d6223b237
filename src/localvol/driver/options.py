"""Typed access to the request ``Opts`` bag."""

import os
from collections.abc import Mapping
from typing import Any

from localvol.driver.errors import InvalidOptionsError

VOLUME_ID_OPT = "volume_id"
PASSCODE_OPT = "passcode"

MISSING_VOLUME_ID = "Missing mandatory 'volume_id' field in 'Opts'"
PASSCODE_NOT_STRING = "Opts.passcode must be a string value"
INVALID_VOLUME_ID = "Invalid 'volume_id' field in 'Opts': '{}' must be a plain directory name"


class VolumeOptions:
    """Recognized request options with type-checked accessors.

    Options are decoded JSON, so any value type may show up. Accessors
    validate lazily: a mount against an open volume never looks at the
    passcode, even a malformed one.
    """

    def __init__(self, opts: Mapping[str, Any] | None = None) -> None:
        self._opts = dict(opts or {})

    def volume_id(self) -> str:
        value = self._opts.get(VOLUME_ID_OPT)
        if not isinstance(value, str) or not value:
            raise InvalidOptionsError(MISSING_VOLUME_ID)
        # Names one directory under the volume root, never a path
        separators = {os.sep, os.altsep} - {None}
        if value in (os.curdir, os.pardir) or any(sep in value for sep in separators):
            raise InvalidOptionsError(INVALID_VOLUME_ID.format(value))
        return value

    def has_passcode(self) -> bool:
        return PASSCODE_OPT in self._opts

    def passcode(self) -> str | None:
        """Return the passcode, or None when the option is absent."""
        if PASSCODE_OPT not in self._opts:
            return None
        value = self._opts[PASSCODE_OPT]
        if not isinstance(value, str):
            raise InvalidOptionsError(PASSCODE_NOT_STRING)
        return value
