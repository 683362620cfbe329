"""Display strings derived from completion data.

All user-facing wording lives here so the vocabulary can change in one place.
"""


def pet_names_summary(names: list[str]) -> str:
    """Summarise the pets a task covers ("Rex", "Rex & Milo", "Rex + 2 more")."""
    if not names:
        return "All pets"
    if len(names) == 1:
        return names[0]
    if len(names) == 2:  # noqa: PLR2004
        return " & ".join(names)
    return f"{names[0]} + {len(names) - 1} more"


def completion_progress(*, completed: int, total: int, is_fully_completed: bool) -> str:
    """Partial completion label, e.g. "2 of 3 pets done"."""
    if is_fully_completed:
        return "Done"
    if total == 0:
        return "No pets assigned"
    noun = "pet" if total == 1 else "pets"
    return f"{completed} of {total} {noun} done"


def day_summary(*, done: int, pending: int) -> str:
    """One-line summary for the Today header."""
    if done == 0 and pending == 0:
        return "No tasks scheduled"
    if pending == 0:
        return f"All {done} task(s) done"
    return f"{done} done, {pending} pending"
