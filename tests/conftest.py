"""Shared fixtures."""

import random

import pytest


@pytest.fixture
def textbook_tree():
    # Max to move. Branch "a" is worth 3 to max. In branches "b" and "c" the
    # first reply already holds max below 3, so "b2" and "c2" are never seen.
    return {
        "a": {"a1": 3, "a2": 5},
        "b": {"b1": 2, "b2": 9},
        "c": {"c1": 2, "c2": 1},
    }


@pytest.fixture
def seeded_rng():
    return random.Random(1234)
