from apps.common.repository import GenericRepository

from .models import Address, User


class UserRepository(GenericRepository[User]):
    def __init__(self):
        super().__init__(User)

    def _base_queryset(self):
        return self.model.objects.prefetch_related("addresses")


class AddressRepository(GenericRepository[Address]):
    def __init__(self):
        super().__init__(Address)

    def _base_queryset(self):
        return self.model.objects.order_by("id")
