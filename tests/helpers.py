"""Test doubles shared across test modules."""

from shortlink.idgen import ShortIdGenerator


class SequenceGenerator(ShortIdGenerator):
    """Generator that hands out predetermined IDs (repeats the last one)."""

    def __init__(self, ids):
        super().__init__(default_length=len(ids[0]))
        self.ids = list(ids)
        self.calls = 0

    def generate(self, length=None):
        short_id = self.ids[min(self.calls, len(self.ids) - 1)]
        self.calls += 1
        return short_id
