"""Application delivery – client and batching accumulator."""
from ga4_mp.application.delivery.batch import BatchAccumulator, ErrorCallback, FlushCallback
from ga4_mp.application.delivery.client import DeliveryClient

__all__ = ["BatchAccumulator", "DeliveryClient", "ErrorCallback", "FlushCallback"]
