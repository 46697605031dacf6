from django.apps import AppConfig


class BloodRequestsConfig(AppConfig):
    name = "blood_requests"

    def ready(self):
        import blood_requests.signals  # noqa
