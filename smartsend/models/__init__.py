from smartsend.models.delivery import DeliveryPolicy, DeliveryReceipt

__all__ = ["DeliveryPolicy", "DeliveryReceipt"]
