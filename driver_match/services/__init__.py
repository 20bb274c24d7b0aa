# driver_match/services/__init__.py
"""
HTTP-сервисы.
"""
