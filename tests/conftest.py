import os
import tempfile
from collections.abc import Sequence

import pytest

# Keep test runs away from the real data/ and logs/ directories.
_SCRATCH = tempfile.mkdtemp(prefix="ballista-tests-")
os.environ.setdefault("LAUNCHER_DATA_DIR", os.path.join(_SCRATCH, "data"))
os.environ.setdefault("LAUNCHER_LOGS_DIR", os.path.join(_SCRATCH, "logs"))


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that spawn real processes.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "integration: touches the real system (processes, PATH)"
    )
    config.addinivalue_line("markers", "property: property-based deterministic tests")


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: Sequence[pytest.Item],
) -> None:
    run_integration = config.getoption("--run-integration")
    skip_integration = pytest.mark.skip(
        reason="integration is opt-in; rerun with --run-integration"
    )

    for item in items:
        if "tests/integration/" in item.nodeid:
            item.add_marker("integration")
        if item.get_closest_marker("integration") and not run_integration:
            item.add_marker(skip_integration)
