"""Pygame desktop simulator for FLAPLINE."""
