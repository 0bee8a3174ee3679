from .core_routes import core
from .contact_routes import contact_bp

__all__ = ["core", "contact_bp"]
