"""Guide tooling: facility templates and reward points."""
