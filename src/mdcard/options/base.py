"""Shared behaviour for mdcard's frozen option dataclasses.

Parser and render options are immutable; a changed configuration is a new
instance made with ``create_updated``, which reruns ``__post_init__``
validation on the copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-on-update helpers for frozen option dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        Parameters
        ----------
        **kwargs : Any
            Option names mapped to their new values.

        Returns
        -------
        Self
            Validated copy of this instance.

        Raises
        ------
        TypeError
            If a keyword is not an option of this class.
        ValueError
            If the new values fail validation.

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> list[str]:
        """Return option names in declaration order."""
        return [f.name for f in fields(cls)]  # type: ignore[arg-type]

    @classmethod
    def field_help(cls) -> dict[str, str]:
        """Return the ``help`` metadata of each option that declares one."""
        return {f.name: f.metadata["help"] for f in fields(cls) if "help" in f.metadata}  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, Any]:
        """Return the option values as a plain dictionary."""
        return {name: getattr(self, name) for name in self.field_names()}
