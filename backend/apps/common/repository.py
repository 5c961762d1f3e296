from typing import Generic, Iterable, Optional, Type, TypeVar

from django.db import models

T = TypeVar("T", bound=models.Model)


class GenericRepository(Generic[T]):
    """Thin ORM gateway shared by the app repositories."""

    def __init__(self, model: Type[T]):
        self.model = model

    def _base_queryset(self) -> models.QuerySet:
        return self.model.objects.all()

    def get(self, **filters) -> Optional[T]:
        return self._base_queryset().filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self._base_queryset().filter(**filters)

    def exists(self, *, exclude_id: Optional[int] = None, **filters) -> bool:
        queryset = self.model.objects.filter(**filters)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def create(self, **data) -> T:
        return self.model.objects.create(**data)

    def update(self, obj: T, **data) -> T:
        for key, value in data.items():
            setattr(obj, key, value)
        obj.save(update_fields=list(data.keys()) or None)
        return obj

    def delete(self, obj: T) -> None:
        obj.delete()
