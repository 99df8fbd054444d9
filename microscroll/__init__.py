"""Microscroll study engine backend."""
