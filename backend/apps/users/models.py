from django.db import models


class User(models.Model):
    login_name = models.CharField(max_length=100, unique=True)
    first_name = models.CharField(max_length=100, blank=True, default="")
    last_name = models.CharField(max_length=100)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.login_name


class Address(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="addresses")
    # Unique per owning user, see Meta.constraints
    description = models.CharField(max_length=100)
    street = models.CharField(max_length=150)
    city = models.CharField(max_length=100, blank=True, default="")
    zip_code = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "description"],
                name="uniq_address_description_per_user",
            ),
        ]

    def __str__(self):
        return f"{self.description}: {self.street}"
