"""CP-SAT word box solver using OR-Tools."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.exceptions import SearchTimeout, WordBoxError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def solve_with_cpsat(
    words: Iterable[str],
    row_dim: int,
    col_dim: int,
    symmetric: bool = False,
    timeout: float = 30.0,
    num_workers: int = 4,
) -> Optional[Tuple[str, ...]]:
    """Decide whether a ``row_dim`` x ``col_dim`` word box exists.

    Args:
        words: Candidate words; only lengths ``col_dim`` (rows) and
            ``row_dim`` (columns) are used.
        row_dim: Number of rows.
        col_dim: Number of columns.
        symmetric: Require the grid to equal its transpose.
        timeout: Solver time limit in seconds.
        num_workers: CP-SAT search workers.

    Returns:
        The row words of a box, or ``None`` when the model is infeasible.

    Raises:
        SearchTimeout: the time limit elapsed without a verdict.
    """
    if symmetric and row_dim != col_dim:
        raise ValueError("Symmetric boxes must be square")

    unique = list(dict.fromkeys(words))
    row_words = [w for w in unique if len(w) == col_dim]
    col_words = [w for w in unique if len(w) == row_dim]
    if not row_words or not col_words:
        LOGGER.info("CP-SAT: no words of the required lengths; nothing to solve")
        return None

    alphabet = sorted({ch for w in row_words + col_words for ch in w})
    letter_index: Dict[str, int] = {ch: i for i, ch in enumerate(alphabet)}

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell letter variables
    # ------------------------------------------------------------------
    cells: List[List[cp_model.IntVar]] = [
        [model.new_int_var(0, len(alphabet) - 1, f"L_{r}_{c}") for c in range(col_dim)]
        for r in range(row_dim)
    ]

    # ------------------------------------------------------------------
    # Step 2: Row and column table constraints
    # ------------------------------------------------------------------
    row_tuples = _encode(row_words, letter_index)
    col_tuples = _encode(col_words, letter_index)
    for r in range(row_dim):
        model.add_allowed_assignments(cells[r], row_tuples)
    for c in range(col_dim):
        model.add_allowed_assignments([cells[r][c] for r in range(row_dim)], col_tuples)

    # ------------------------------------------------------------------
    # Step 3: Diagonal mirror
    # ------------------------------------------------------------------
    if symmetric:
        for r in range(row_dim):
            for c in range(r + 1, col_dim):
                model.add(cells[r][c] == cells[c][r])

    # ------------------------------------------------------------------
    # Step 4: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = num_workers

    LOGGER.info(
        "CP-SAT: %dx%d box, %d row words, %d column words, solving (timeout=%0.1fs)...",
        row_dim, col_dim, len(row_words), len(col_words), timeout,
    )

    status = solver.solve(model)

    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: proved that no box exists")
        return None
    if status == cp_model.UNKNOWN:
        LOGGER.warning("CP-SAT: gave up after %.2fs without a verdict", solver.wall_time)
        raise SearchTimeout(f"CP-SAT found no verdict within {timeout}s")
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise WordBoxError(f"CP-SAT failed (status={solver.status_name(status)})")

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 5: Extract solution
    # ------------------------------------------------------------------
    return tuple(
        "".join(alphabet[solver.value(var)] for var in row)
        for row in cells
    )


def _encode(words: Sequence[str], letter_index: Dict[str, int]) -> List[List[int]]:
    return [[letter_index[ch] for ch in word] for word in words]
