"""
tests/conftest.py – shared pytest hooks.

Adds the --integration flag; tests marked ``integration`` are skipped
unless it is given.
"""

from __future__ import annotations

import pytest


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests against the live Crypto-Trade API",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("--integration"):
        return
    skip_integration = pytest.mark.skip(reason="pass --integration to run against the live API")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
