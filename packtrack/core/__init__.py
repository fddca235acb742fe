"""Core module - CSV codec, record filters and the aggregation engine."""
