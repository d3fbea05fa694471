"""Configuration for property-based testing."""

from hypothesis import settings, Verbosity
from hypothesis.database import DirectoryBasedExampleDatabase
import os


class PropertyTestConfig:
    """Hypothesis profiles shared by the property tests."""

    MIN_ITERATIONS = 100
    MAX_ITERATIONS = 1000

    # Deterministic seeding for CI reproducibility
    DETERMINISTIC_SEED = 42

    EXAMPLE_DATABASE_PATH = "tests/property_based/.hypothesis_examples"

    DEADLINE = 60000  # milliseconds per example

    _configured = False

    @classmethod
    def configure_hypothesis(cls):
        """Register the profiles and load the one named by HYPOTHESIS_PROFILE."""
        if cls._configured:
            return
        cls._configured = True

        os.makedirs(cls.EXAMPLE_DATABASE_PATH, exist_ok=True)

        settings.register_profile(
            "default_crm",
            max_examples=cls.MIN_ITERATIONS,
            deadline=cls.DEADLINE,
            verbosity=Verbosity.normal,
            database=DirectoryBasedExampleDatabase(cls.EXAMPLE_DATABASE_PATH),
            print_blob=True,
        )

        settings.register_profile(
            "ci",
            max_examples=cls.MIN_ITERATIONS,
            deadline=cls.DEADLINE,
            verbosity=Verbosity.quiet,
            database=None,  # derandomize requires database=None
            derandomize=True,
            print_blob=True,
        )

        settings.register_profile(
            "dev",
            max_examples=cls.MAX_ITERATIONS,
            deadline=cls.DEADLINE,
            verbosity=Verbosity.verbose,
            database=DirectoryBasedExampleDatabase(cls.EXAMPLE_DATABASE_PATH),
            print_blob=True,
        )

        settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default_crm"))


def get_test_seed():
    """Deterministic seed for CI, None otherwise."""
    if os.getenv("CI") or os.getenv("HYPOTHESIS_PROFILE") == "ci":
        return PropertyTestConfig.DETERMINISTIC_SEED
    return None
