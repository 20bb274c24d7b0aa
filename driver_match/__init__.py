# driver_match/__init__.py
"""
Driver Match: поиск, ранжирование и тарификация водителей для заявки на подачу.
"""
