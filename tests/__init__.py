"""MovieGraph test suite."""
