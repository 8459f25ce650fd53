"""
Configuration registries for the decarbonisation engine.

constants   — canonical physical, target and financial constants
assumptions — default baseline assumption tables
settings    — environment-driven runtime settings and logging setup
"""
