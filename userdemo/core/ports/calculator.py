# userdemo\core\ports\calculator.py
from typing import List, Protocol


class ICalculator(Protocol):
    """Port for the arithmetic helper used by the controller."""

    def add(self, a: int, b: int) -> int:
        ...

    def sum(self, values: List[int]) -> int:
        ...

    def multiply(self, a: int, b: int) -> int:
        ...
