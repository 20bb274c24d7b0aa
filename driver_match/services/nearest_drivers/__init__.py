# driver_match/services/nearest_drivers/__init__.py
"""
Nearest Drivers Service: HTTP API подбора ближайших водителей.
"""
