import importlib.util
import sys

import pytest

from blockgen.backends.python_generator import generate_python
from blockgen.builder import build_structural_model
from blockgen.examples import build_example_schema


@pytest.fixture
def load_generated(tmp_path, monkeypatch):
    """Write generated source to tmp_path and import it as a module."""
    counter = {"n": 0}

    def _load(source):
        counter["n"] += 1
        name = f"generated_blocks_{counter['n']}"
        path = tmp_path / f"{name}.py"
        path.write_text(source, encoding="utf-8")
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec)
        monkeypatch.setitem(sys.modules, name, module)
        spec.loader.exec_module(module)
        return module

    return _load


@pytest.fixture
def example_model():
    return build_structural_model(build_example_schema())


@pytest.fixture
def example_module(load_generated, example_model):
    return load_generated(generate_python(example_model))
