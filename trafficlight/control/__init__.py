"""
Intersection control module: signal heads, the timed controller and its adapters.
"""
