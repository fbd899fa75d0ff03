"""SpecDiff modules."""
