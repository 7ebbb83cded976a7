"""Shared test doubles."""

from typing import List


class ScriptedRng:
    """
    Stands in for numpy's Generator, returning scripted integers.

    Each integers() call consumes the next scripted value; once the script
    runs out, the fallback is returned. Values are not range checked, so the
    script must respect the bounds the code under test asks for.
    """

    def __init__(self, values: List[int], fallback: int = 0):
        self.values = list(values)
        self.fallback = fallback
        self.calls = 0

    def integers(self, low, high=None):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.fallback
