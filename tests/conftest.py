"""Shared fixtures: manifest files and a fresh workspace config per test."""

from pathlib import Path

import pytest

from devrecipe.convert.applier import ToolToRecipeApplier
from devrecipe.core.models import WorkspaceConfig
from devrecipe.manifest.codec import ManifestListCodec

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding='utf-8')


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def petclinic_yaml() -> str:
    return read_fixture("petclinic.yaml")


@pytest.fixture
def sidecar_yaml() -> str:
    return read_fixture("sidecar.yaml")


@pytest.fixture
def codec() -> ManifestListCodec:
    return ManifestListCodec()


@pytest.fixture
def applier() -> ToolToRecipeApplier:
    return ToolToRecipeApplier()


@pytest.fixture
def workspace_config() -> WorkspaceConfig:
    return WorkspaceConfig()
