"""Order summary application - source tables, materialized aggregate, services."""
