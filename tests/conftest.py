import random

import pytest


@pytest.fixture
def rng():
    return random.Random(20240607)


def random_operations(rng, count=300, key_range=200):
    """Mixed insert/delete script; deletes target mostly present keys."""
    inserted = []
    ops = []
    for _ in range(count):
        if inserted and rng.random() < 0.4:
            key = rng.choice(inserted) if rng.random() < 0.8 else rng.randrange(key_range)
            ops.append(("delete", key))
        else:
            key = rng.randrange(key_range)
            inserted.append(key)
            ops.append(("insert", key))
    return ops
