"""Reports package - text views over the analytics engine."""
