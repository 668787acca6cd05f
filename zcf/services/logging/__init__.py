from .logging_service import setup_logging

__all__ = ["setup_logging"]
