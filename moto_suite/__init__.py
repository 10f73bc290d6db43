"""MotoSuite: dealer sales and inventory dashboard."""
