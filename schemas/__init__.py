"""JSON schemas shipped with club-collector, read via importlib.resources."""
