from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient

from qkd_chat.main import create_app
from qkd_chat.modules.bb84.randomness import RandomSource

def scripted_source(bits):
    it = iter(bits)
    return RandomSource(lambda: next(it))

def cycling_source(bits):
    it = itertools.cycle(bits)
    return RandomSource(lambda: next(it))

@pytest.fixture
def client():
    return TestClient(create_app())
