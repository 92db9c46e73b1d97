"""Shared fixtures for dotversion tests."""

import os

import pytest

from dotversion.config import Config
from dotversion.constants import Constants
from dotversion.host import NullHostMetadata
from dotversion.loader import DescriptorLoader
from dotversion.resolver import VersionResolver

RESOURCES = os.path.join(os.path.dirname(os.path.abspath(__file__)), "resources")


class CountingLoader(DescriptorLoader):
    """DescriptorLoader that records every namespace it is asked for."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def load(self, namespace):
        self.calls.append(namespace)
        return super().load(namespace)


def make_class(name, module):
    """Create a class that appears to be defined in ``module``."""
    return type(name, (), {"__module__": module})


@pytest.fixture(autouse=True)
def clear_suppress_setting(monkeypatch):
    """Every test starts with the placeholder warning enabled."""
    monkeypatch.delenv(Constants.ENV_SUPPRESS_VAR_FOUND_WARNING, raising=False)


@pytest.fixture
def loader():
    return CountingLoader([RESOURCES])


@pytest.fixture
def resolver(loader):
    """Resolver over tests/resources with no host metadata."""
    return VersionResolver(loader=loader, host_metadata=NullHostMetadata(), config=Config())
