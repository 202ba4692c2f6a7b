from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.products"
    label = "products"

    def ready(self) -> None:
        # Registers the RPC handlers with the Celery app.
        from modules.products import tasks  # noqa: F401
