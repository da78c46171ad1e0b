from math import pi, sqrt

from sumtype import sum_type

Shape = sum_type(
    'Shape',
    Circle=(float, ),
    Rectangle=(float, float),
    Triangle=(float, float, float)
)


def heron(a: float, b: float, c: float) -> float:
    s = (a + b + c) / 2
    return sqrt(s * (s - a) * (s - b) * (s - c))


def area(shape) -> float:
    return shape.match({
        'Circle': lambda r: pi * r**2,
        'Rectangle': lambda w, h: w * h,
        'Triangle': heron
    })


if __name__ == '__main__':
    for shape in (Shape.Circle(1.0),
                  Shape.Rectangle(2.0, 3.0),
                  Shape.Triangle(3.0, 4.0, 5.0)):
        print(f'{shape!r}: {area(shape):.2f}')
