from django.apps import AppConfig


class ReceiptsConfig(AppConfig):
    name = "modules.receipts"
    label = "receipts"
    verbose_name = "Cupons"
