"""Adaptadores de infraestructura (HTTP, filesystem, CSV)."""
