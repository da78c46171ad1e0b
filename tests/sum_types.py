from typing import Generic, Tuple, TypeVar

from sumtype import SumType, sum_type

A = TypeVar('A')


class Download(SumType):
    Downloading: Tuple[int]
    Completed: Tuple[()]
    Failed: Tuple[str]


Maybe = sum_type('Maybe', Nothing=(), Just=(object, ))


class Tree(SumType, Generic[A]):
    Leaf: Tuple[()]
    Node: Tuple['Tree[A]', A, 'Tree[A]']


class Shape(SumType):
    Circle: float
    Rectangle: (float, float)
    Triangle: Tuple[float, float, float]
