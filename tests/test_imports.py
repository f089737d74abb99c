"""
Verify every module of the package imports cleanly.
"""

import importlib
import pkgutil

import pytest

import caged_explorer


def find_modules():
    """Dotted names of every module in the package."""
    return sorted(
        info.name
        for info in pkgutil.walk_packages(caged_explorer.__path__, prefix="caged_explorer.")
    )


@pytest.mark.parametrize("module_name", find_modules())
def test_module_imports(module_name):
    importlib.import_module(module_name)


def test_public_api():
    for name in caged_explorer.__all__:
        assert hasattr(caged_explorer, name), name
