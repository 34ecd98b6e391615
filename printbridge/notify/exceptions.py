class WebhookDeliveryError(Exception):
    """Raised when a webhook POST fails. Logged by the notifier, never retried."""
