"""
Application layer.

Use cases that orchestrate the domain for external actors, the ports
(protocols) they depend on, and the Result type they return.
"""
