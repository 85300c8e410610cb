from core.app_context import AppContext, get_app_context


def get_context() -> AppContext:
    """Зависимость FastAPI; в тестах подменяется через ``dependency_overrides``."""
    return get_app_context()
