import os
import re
import sys

import pytest

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
PYPROJECT = os.path.join(os.path.dirname(PACKAGE_DIR), "pyproject.toml")

# subpackages holding library code, their tests included
MODULES = ["utils", "core"]

RUNTIME_LIBS = {"sympy"}
TEST_LIBS = {"pytest", "numpy"}


def _top_level_imports(modules):
    """
    Yield (path, line number, top-level module, is_test_file) for every
    unindented import statement in the given subpackages.
    Relative imports are skipped.
    """
    for module in modules:
        for root, _, files in os.walk(os.path.join(PACKAGE_DIR, module)):
            for file in files:
                if not file.endswith(".py"):
                    continue
                path = os.path.join(root, file)
                with open(path, "r", encoding="utf-8") as f:
                    for line_num, line in enumerate(f, 1):
                        if line.startswith("import "):
                            assert ',' not in line, \
                                f"{path}:line {line_num}: multiple imports using import statement are not allowed"
                            name = line[len("import "):].strip().split(' ')[0]
                        elif line.startswith("from "):
                            name = line[len("from "):].strip().split(' ')[0]
                        else:
                            continue
                        name = name.split('.')[0]
                        if name:
                            yield path, line_num, name, file.startswith("test_")


def _requirement_name(req: str) -> str:
    return re.split(r"[\s<>=!~;\[]", req.strip(), maxsplit=1)[0].lower()


def test_dependency():
    """
    Library code may only import the standard library, sympy and itself.
    Test modules may additionally import pytest and numpy.
    """
    # Python 3.10+
    if not hasattr(sys, 'stdlib_module_names'):
        return
    allowed = set(sys.stdlib_module_names) | RUNTIME_LIBS

    forbidden = sorted(
        (path, line_num, name) for path, line_num, name, is_test in _top_level_imports(MODULES)
        if name not in allowed and not (is_test and name in TEST_LIBS)
    )
    message = '\n'.join(f"{path}:line {line_num}:import {name}" for path, line_num, name in forbidden)
    assert not forbidden, f"Forbidden dependencies detected: {message}."


def test_declared_dependencies():
    """
    Every runtime requirement of pyproject.toml is imported by library code
    and every third-party library is declared where it is used.
    """
    tomllib = pytest.importorskip("tomllib")
    if not os.path.exists(PYPROJECT):
        pytest.skip("pyproject.toml is not available in an installed copy")
    with open(PYPROJECT, "rb") as f:
        project = tomllib.load(f)["project"]

    runtime = {_requirement_name(_) for _ in project["dependencies"]}
    test_only = {_requirement_name(_) for _ in project["optional-dependencies"]["test"]}
    assert runtime == RUNTIME_LIBS
    assert test_only == TEST_LIBS

    library_imports, test_imports = set(), set()
    for _, _, name, is_test in _top_level_imports(MODULES):
        if name in sys.stdlib_module_names:
            continue
        (test_imports if is_test else library_imports).add(name)

    assert library_imports == runtime
    assert test_imports - runtime <= test_only
