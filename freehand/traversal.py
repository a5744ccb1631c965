from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

from .constants import MAX_RENDER_DEPTH
from .entities import PageInfo
from .errors import RecursionLimitError
from .path import Path
from .transform import Transform, page_normalization


class TraversalState:
    """Transform stacks and the active element path of one traversal.

    ``current`` holds the transforms of enclosing groups, outermost first.
    ``fake`` holds the shifts applied while rendering a nested sub-document.
    All changes go through the context managers below, which restore the
    previous state even when the body raises.
    """

    def __init__(self, page: PageInfo, max_depth: int = MAX_RENDER_DEPTH) -> None:
        self.page = page
        self.max_depth = max_depth
        self.current: List[Transform] = []
        self.fake: List[Transform] = []
        self.active: List[int] = []

    @property
    def depth(self) -> int:
        return len(self.active)

    @contextmanager
    def pushed(self, transform: Transform) -> Iterator[None]:
        self.current.append(transform)
        try:
            yield
        finally:
            self.current.pop()

    @contextmanager
    def faked(self, *transforms: Transform) -> Iterator[None]:
        mark = len(self.fake)
        self.fake.extend(transforms)
        try:
            yield
        finally:
            del self.fake[mark:]

    @contextmanager
    def isolated(
        self,
        current: Sequence[Transform] = (),
        fake: Sequence[Transform] = (),
        page: Optional[PageInfo] = None,
    ) -> Iterator[None]:
        saved = (self.current, self.fake, self.page)
        self.current = list(current)
        self.fake = list(fake)
        if page is not None:
            self.page = page
        try:
            yield
        finally:
            self.current, self.fake, self.page = saved

    @contextmanager
    def visiting(self, element_id: int) -> Iterator[None]:
        if element_id in self.active:
            raise RecursionLimitError(f"element 0x{element_id:x} references itself")
        if len(self.active) >= self.max_depth:
            raise RecursionLimitError(
                f"element 0x{element_id:x} nested deeper than {self.max_depth} levels"
            )
        self.active.append(element_id)
        try:
            yield
        finally:
            self.active.pop()

    def chain(self, own: Optional[Transform] = None) -> List[Transform]:
        """Transforms in application order: own, current innermost first,
        page normalisation, then the fake stack outermost first."""
        transforms: List[Transform] = []
        if own is not None:
            transforms.append(own)
        transforms.extend(reversed(self.current))
        transforms.append(page_normalization(self.page.min_x, self.page.max_y))
        transforms.extend(self.fake)
        return transforms

    def transform_point(
        self, x: float, y: float, own: Optional[Transform] = None
    ) -> Tuple[float, float]:
        for transform in self.chain(own):
            x, y = transform.apply_to_point(x, y)
        return x, y

    def transform_path(self, path: Path, own: Optional[Transform] = None) -> None:
        for transform in self.chain(own):
            path.transform(transform)
