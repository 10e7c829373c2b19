"""Form layer: the reactive FormModel and its notification channels."""

from regform.form.channel import NotificationChannel, Subscription
from regform.form.model import FormModel

__all__ = ["FormModel", "NotificationChannel", "Subscription"]
