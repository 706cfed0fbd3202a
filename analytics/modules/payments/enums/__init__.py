from .payment_status_enum import PaymentStatus, TERMINAL_PAYMENT_STATUSES

__all__ = ["PaymentStatus", "TERMINAL_PAYMENT_STATUSES"]
