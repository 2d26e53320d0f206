"""Two-sample test backends."""
