from .payment_models import Payment, PLACEHOLDER_ID_OFFSET, placeholder_id_for

__all__ = ["Payment", "PLACEHOLDER_ID_OFFSET", "placeholder_id_for"]
