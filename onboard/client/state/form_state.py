"""Form field values and the inline errors shown next to them."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence

from onboard.shared.domain.validation.rules import ValidationResult

logger = logging.getLogger(__name__)


class FormState:
    """Values and per-field errors for one screen.

    Every field always has a value slot (``""`` when unset) and an error
    slot (``None`` when no error is shown). Errors are only re-derived by an
    explicit :meth:`apply_validation`; editing a field clears its error at
    once.

    After :meth:`unmount` the state is frozen and late updates from an
    in-flight submission are ignored.
    """

    def __init__(self, fields: Sequence[str]) -> None:
        if not fields:
            raise ValueError("A form needs at least one field")
        self.fields: tuple[str, ...] = tuple(fields)
        self.values: Dict[str, str] = {name: "" for name in self.fields}
        self.errors: Dict[str, Optional[str]] = {name: None for name in self.fields}
        self.mounted = True

    def _check_field(self, name: str) -> None:
        if name not in self.values:
            raise KeyError(f"Unknown field '{name}'. Fields: {list(self.fields)}")

    def set_value(self, name: str, value: str) -> None:
        """Handle a keystroke: store the value and clear that field's error."""
        self._check_field(name)
        if not self.mounted:
            logger.debug(f"Ignoring edit of '{name}' on unmounted form")
            return
        self.values[name] = value
        self.errors[name] = None

    def apply_validation(self, result: ValidationResult) -> None:
        """Replace all shown errors with the result of a validation pass."""
        if not self.mounted:
            logger.debug("Ignoring validation result on unmounted form")
            return
        self.errors = {name: result.errors.get(name) for name in self.fields}

    def clear_errors(self) -> None:
        self.errors = {name: None for name in self.fields}

    def reset(self) -> None:
        self.values = {name: "" for name in self.fields}
        self.clear_errors()

    def unmount(self) -> None:
        self.mounted = False

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())

    def error(self, name: str) -> Optional[str]:
        self._check_field(name)
        return self.errors[name]

    def payload(self, fields: Optional[Iterable[str]] = None) -> Dict[str, str]:
        """Copy of the values for the given fields (all fields by default)."""
        names = self.fields if fields is None else tuple(fields)
        for name in names:
            self._check_field(name)
        return {name: self.values[name] for name in names}
