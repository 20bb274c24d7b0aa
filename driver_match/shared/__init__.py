# driver_match/shared/__init__.py
"""
Общий код HTTP-слоя.

Модули:
- models: DTO запросов и ответов (Pydantic)
"""

__all__: list[str] = []
