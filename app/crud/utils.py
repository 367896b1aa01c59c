# app/crud/utils.py
from typing import Iterable


def update_fields(target, patch: dict, exclude: Iterable[str] = ()) -> None:
    """Copy ``patch`` onto ``target``.

    ``patch`` should come from ``model_dump(exclude_unset=True)`` so that
    omitted fields are skipped while explicit nulls are applied.
    """
    for key, value in patch.items():
        if key in exclude:
            continue
        setattr(target, key, value)
