"""Runtime settings and fixture data loading."""
