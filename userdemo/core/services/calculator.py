# userdemo\core\services\calculator.py
from typing import List


class Calculator:
    """
    Stateless integer arithmetic.

    Python integers are unbounded, so none of these operations overflow.
    """

    def add(self, a: int, b: int) -> int:
        return a + b

    def sum(self, values: List[int]) -> int:
        # Empty input sums to 0
        return sum(values)

    def multiply(self, a: int, b: int) -> int:
        return a * b
