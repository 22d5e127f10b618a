## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass, field

from .errors import BFLabelError


@dataclass
class LabelAllocator:
    """Hands out loop label numbers for one code generation pass.

    Numbers are unique across the whole program, sibling loops included, and
    `exit()` always returns the number of the innermost loop still open, so
    `loopNStart` / `loopNEnd` pairs nest the same way the brackets do.
    """
    count: int = 0
    stack: list[int] = field(default_factory=list)

    def enter(self) -> int:
        self.count += 1
        self.stack.append(self.count)
        return self.count

    def exit(self) -> int:
        if not self.stack:
            raise BFLabelError("Loop exit requested with no loop open.")
        return self.stack.pop()

    @property
    def depth(self) -> int:
        return len(self.stack)
