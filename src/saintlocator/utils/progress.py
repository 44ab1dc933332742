from __future__ import annotations

from typing import Iterable, Optional, TypeVar, cast

from tqdm import tqdm

_T = TypeVar("_T")


class Progress:
    """
    Thin switch around tqdm for long document batches. With enabled=False,
    iteration proceeds without a progress bar and nothing touches stderr.

    Usage:
        prog = Progress(enabled=True)
        for doc_id, raw in prog.iter(documents, desc="Assembling"):
            ...
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled

    def iter(
        self,
        iterable: Iterable[_T],
        *,
        desc: Optional[str] = None,
        total: Optional[int] = None,
    ) -> Iterable[_T]:
        if not self.enabled:
            return iterable
        return cast(Iterable[_T], tqdm(iterable, desc=desc, total=total, unit="doc", leave=False))
