"""
Copyright (c) 2020, the Decred developers
See LICENSE for details
"""

import random

import pytest

from starkhash.crypto.stark.field import CURVE_P
from starkhash.util import helpers


# Seed initialization is delegated to tests.
# random.seed(0)


@pytest.fixture
def randFelt():
    def _randFelt(low=0, high=CURVE_P - 1):
        """
        A random field element in [low, high].
        """
        return random.randint(low, high)

    return _randFelt


@pytest.fixture(scope="module")
def prepareLogger(request):
    helpers.prepareLogging()
