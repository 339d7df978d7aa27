"""Deterministic integrity checks for completed word boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.exceptions import ValidationError
from ..core.models import WordBox
from ..data.lexicon import Lexicon
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class BoxValidator:
    """Runs deterministic validation over a finished box."""

    def __init__(self, lexicon: Lexicon) -> None:
        self.lexicon = lexicon

    def validate(self, box: WordBox) -> ValidationResult:
        try:
            self._check_complete(box)
            self._check_rows(box)
            self._check_columns(box)
            self._check_symmetry(box)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_complete(self, box: WordBox) -> None:
        if not box.is_done():
            raise ValidationError(
                f"Box has {len(box.rows)} of {box.row_dim} rows filled"
            )

    def _check_rows(self, box: WordBox) -> None:
        for r, word in enumerate(box.rows):
            if len(word) != box.col_dim:
                raise ValidationError(f"Row {r} '{word}' is not {box.col_dim} letters long")
            if not self.lexicon.contains(word):
                raise ValidationError(f"Row {r} '{word}' is not a dictionary word")

    def _check_columns(self, box: WordBox) -> None:
        for c, word in enumerate(box.column_prefixes()):
            if not self.lexicon.contains(word):
                raise ValidationError(f"Column {c} '{word}' is not a dictionary word")

    def _check_symmetry(self, box: WordBox) -> None:
        if not box.symmetric:
            return
        for r in range(box.row_dim):
            for c in range(r + 1, box.col_dim):
                if box.rows[r][c] != box.rows[c][r]:
                    raise ValidationError(
                        f"Cell ({r},{c}) '{box.rows[r][c]}' does not mirror "
                        f"({c},{r}) '{box.rows[c][r]}'"
                    )
