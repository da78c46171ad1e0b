from __future__ import annotations

from typing import Tuple

from sumtype import SumType


class Tree(SumType):
    Leaf: Tuple[()]
    Node: Tuple[Tree, int, Tree]


class Expr(SumType):
    Literal: int
    Add: (Expr, Expr)
    Negate: Expr
