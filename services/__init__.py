"""Пакет прикладных сервисов.

Подмодули не импортируются на уровне пакета, чтобы ``import services``
не тянул за собой базу данных и клиентов Google API.

Импортируйте нужные подмодули напрямую, например:
    from services import ledger_service
    from services import reservation_service
    from services.sales import sale_app_service
"""

__all__: list[str] = []
