"""Full-page views: the tutorial index and the standalone per-exercise pages."""
