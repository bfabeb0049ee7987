"""Configuration package for the lasso game.

Constants are grouped by concern (display, capture, spawning) and aggregated
by the dataclasses in ``lasso.config.simulation_config``.
"""
