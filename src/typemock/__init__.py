"""Declaration schema extraction for sample-data generation."""
