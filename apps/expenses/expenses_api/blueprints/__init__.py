"""HTTP blueprints exposed by the Expenses API."""
