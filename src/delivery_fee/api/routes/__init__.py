from . import cep, delivery, health

__all__ = ["cep", "delivery", "health"]
