"""Upgrades presentation layer."""
