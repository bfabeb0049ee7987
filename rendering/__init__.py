"""Pygame front end for the lasso capture game."""
