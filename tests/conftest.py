import os
import sys
import random

import pytest

# Make the top-level modules importable without installing the project
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)


@pytest.fixture()
def random_data():
	"""10 KB of seeded random bytes."""
	rng = random.Random(42)
	return bytes(rng.getrandbits(8) for _ in range(10 * 1024))


@pytest.fixture()
def text_data():
	return b'This is a test of the tree header format. ' * 100
