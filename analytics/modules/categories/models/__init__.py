from .category_models import Category

__all__ = ["Category"]
