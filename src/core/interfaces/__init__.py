"""Interfaces/abstracciones del Core.

Define contratos (Protocol) que implementan adaptadores concretos, p.ej. el
transporte HTTP hacia el registry.
"""
