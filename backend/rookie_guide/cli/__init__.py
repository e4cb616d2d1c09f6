from .seed_templates import app

__all__ = ["app"]
