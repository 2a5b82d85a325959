import pytest

from liszp.interpreter import Interpreter


@pytest.fixture
def interp():
    """A fresh interpreter with the standard library loaded."""
    return Interpreter()


@pytest.fixture
def bare():
    """A fresh interpreter with builtins only, no standard library."""
    return Interpreter(prelude=None)


@pytest.fixture(scope="module")
def std_interp():
    # Shared across a module; tests using it must not define anything
    return Interpreter()
