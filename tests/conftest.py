import pytest
import factorypress as fp

EXAMPLE_INPUT = """
[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}
[...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4) {7,5,12,7,2}
[.###.#] (0,1,2,3,4) (0,3,4) (0,1,2,4,5) (1,2) {10,11,11,5,10,5}
"""


@pytest.fixture
def example_input() -> str:
    """Three-machine example with answers 7 (part A) and 33 (part B)."""
    return EXAMPLE_INPUT


@pytest.fixture
def example_machines():
    return fp.parse_input(EXAMPLE_INPUT)


@pytest.fixture(params=[1, 2], scope="session")
def processes(request: pytest.FixtureRequest) -> int:
    """Provide session-level fixture for serial and parallel solves."""
    return request.param
