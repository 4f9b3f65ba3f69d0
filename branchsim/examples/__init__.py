"""Example games built on the engine."""
