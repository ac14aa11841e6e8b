"""Fixture module read as text by the extractor tests. Never imported."""


class SomeClass:
    def __init__(self, value: str, n: int) -> None:
        self.prop = f"val-{value}-{n}"

    def method1(self, p):
        return p

    @staticmethod
    def f1(p):
        return p + 10


def func1(p: int) -> int:
    # dropped when the callable is isolated
    return p + 1


def func2():
    return 3


first, second, third = apply_all(lambda p: p, lambda p: p * 2, lambda p: p * 3)


def f1(p):
    return p


f2 = lambda p: p * 2
handlers = {"f3": lambda p: p * 3}
results = sorted(items, key=lambda item: -item)
