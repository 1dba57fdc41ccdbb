"""Cardano wallet reputation checker backed by Blockfrost."""

__version__ = "0.1.0"
