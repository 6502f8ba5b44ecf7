from __future__ import annotations
from geometry import TransformMatrix


class DrawingContext:
    def __init__(self, transform: TransformMatrix = None):
        self.transform = transform.copy() if transform is not None else TransformMatrix.identity()

    def push(self) -> 'DrawingContext':
        return DrawingContext(self.transform)

    def apply_transform(self, matrix: TransformMatrix):
        self.transform = self.transform.multiply(matrix)


class ContextStack:
    """Save/restore stack of drawing contexts shared by the concrete canvases.

    The base context can never be popped; an unbalanced restore is a bug in
    the caller and raises.
    """

    def __init__(self):
        self.context_stack = [DrawingContext()]

    @property
    def current(self) -> DrawingContext:
        return self.context_stack[-1]

    @property
    def depth(self) -> int:
        return len(self.context_stack) - 1

    def push(self):
        self.context_stack.append(self.current.push())

    def pop(self):
        if len(self.context_stack) <= 1:
            raise RuntimeError("restore() called without a matching save()")
        self.context_stack.pop()

    def transform(self, matrix: TransformMatrix):
        self.current.apply_transform(matrix)

    def translate(self, dx: float, dy: float):
        self.current.apply_transform(TransformMatrix.translate(dx, dy))

    def scale(self, sx: float, sy: float = None):
        self.current.apply_transform(TransformMatrix.scale(sx, sy))
