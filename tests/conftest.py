"""Shared fixtures for the StarFlow test suite."""

import pytest

from starflow import ManualFrameScheduler, Root, create_signal


class Cell:
    """Model storage cell standing in for a mount: counts writes."""

    def __init__(self, model=None):
        self.model = model
        self.writes = 0

    def get(self):
        return self.model

    def set(self, model):
        self.model = model
        self.writes += 1


@pytest.fixture
def cell():
    return Cell()


@pytest.fixture
def signal(cell):
    return create_signal(cell.get, cell.set)


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def root():
    return Root()
