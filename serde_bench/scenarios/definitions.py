"""
List size scenario definitions for serialization benchmarking.

Each scenario serializes a list of identical small objects; only the list
length changes between scenarios.
"""

from dataclasses import dataclass, field


# Object repeated to build every test list.
TEST_OBJECT = {"foo": ["bar", 5, True], "baz": None}


@dataclass(frozen=True)
class ListSizeScenario:
    """Definition of a list size to benchmark."""

    label: str
    length: int
    metadata: dict = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "label": self.label,
            "length": self.length,
            "metadata": self.metadata,
        }


def build_test_list(size: int) -> list[dict]:
    """Build a list of ``size`` references to TEST_OBJECT."""
    if size < 0:
        raise ValueError(f"list size must be non-negative, got {size}")
    return [TEST_OBJECT] * size


# ============================================================================
# Default sizes
# ============================================================================

DEFAULT_SCENARIOS = [
    ListSizeScenario("10k", 10_000),
    ListSizeScenario("100k", 100_000),
    ListSizeScenario("250k", 250_000),
    ListSizeScenario("500k", 500_000),
    ListSizeScenario("750k", 750_000),
]

# ============================================================================
# Large sizes (slow, several seconds per iteration)
# ============================================================================

EXTENDED_SCENARIOS = [
    ListSizeScenario("1m", 1_000_000),
    ListSizeScenario("5m", 5_000_000),
    ListSizeScenario("10m", 10_000_000),
]

ALL_SCENARIOS = {s.label: s for s in DEFAULT_SCENARIOS + EXTENDED_SCENARIOS}


def get_scenario(label: str) -> ListSizeScenario:
    """Get a scenario by label, e.g. ``"250k"``."""
    try:
        return ALL_SCENARIOS[label]
    except KeyError:
        raise ValueError(
            f"Unknown list size: {label!r} (choose from {', '.join(ALL_SCENARIOS)})"
        ) from None


def get_scenarios(labels: list[str]) -> list[ListSizeScenario]:
    """Resolve a list of labels, preserving the given order."""
    return [get_scenario(label) for label in labels]


def list_scenarios() -> list[str]:
    """List all available scenario labels."""
    return list(ALL_SCENARIOS)


def get_default_scenarios(extended: bool = False) -> list[ListSizeScenario]:
    """Get the default size sweep, optionally including the large sizes."""
    if extended:
        return DEFAULT_SCENARIOS + EXTENDED_SCENARIOS
    return list(DEFAULT_SCENARIOS)
