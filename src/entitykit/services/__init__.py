"""Domain services — thin business rules over the repository and notifier."""

from entitykit.services.items import ItemService
from entitykit.services.products import ProductService
from entitykit.services.users import UserService

__all__ = ["ItemService", "ProductService", "UserService"]
