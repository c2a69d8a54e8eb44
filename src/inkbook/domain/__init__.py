"""Domain layer for inkbook application."""

# Services are imported lazily so that utils and the database layer can use
# domain entities and errors without importing every service.
_SERVICES = {
    "AppointmentService": "inkbook.domain.appointment",
    "CalendarService": "inkbook.domain.calendar",
    "CategoryService": "inkbook.domain.category",
    "ClientService": "inkbook.domain.client",
    "TransactionService": "inkbook.domain.transaction",
    "TransactionRuleEngine": "inkbook.domain.automation",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
