"""JSON API serving the dashboard data."""
