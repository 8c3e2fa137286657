"""
List size scenarios for serialization benchmarking.
"""

from .definitions import (
    ListSizeScenario,
    TEST_OBJECT,
    ALL_SCENARIOS,
    DEFAULT_SCENARIOS,
    EXTENDED_SCENARIOS,
    build_test_list,
    get_scenario,
    get_scenarios,
    list_scenarios,
    get_default_scenarios,
)

__all__ = [
    "ListSizeScenario",
    "TEST_OBJECT",
    "ALL_SCENARIOS",
    "DEFAULT_SCENARIOS",
    "EXTENDED_SCENARIOS",
    "build_test_list",
    "get_scenario",
    "get_scenarios",
    "list_scenarios",
    "get_default_scenarios",
]
