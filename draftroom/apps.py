# draftroom/apps.py
from django.apps import AppConfig


class DraftroomConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "draftroom"
    verbose_name = "Draft Room"
