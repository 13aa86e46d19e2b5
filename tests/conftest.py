import pytest

from minilisp.config import Settings
from minilisp.interpreter import Interpreter
from minilisp.types.environment import Environment
from minilisp.types.function_table import FunctionTable

# Every test runs with a clean configuration: settings normally come from
# MINILISP_* environment variables, which must not leak in from the shell.


@pytest.fixture(autouse=True)
def _clean_minilisp_env(monkeypatch):
    monkeypatch.delenv("MINILISP_INDENT", raising=False)
    monkeypatch.delenv("MINILISP_LOG_LEVEL", raising=False)


@pytest.fixture
def env():
    """Fresh, empty environment stack."""
    return Environment()


@pytest.fixture
def functions():
    """Empty function table."""
    return FunctionTable()


@pytest.fixture
def interp():
    return Interpreter(Settings())


@pytest.fixture
def run(interp):
    """Evaluate source and return the value of its last expression."""
    def _run(source):
        results = interp.eval(source)
        return results[-1] if results else None
    return _run
