"""Application – delivery use cases built on the kernel and adapters."""

from ga4_mp.application.delivery import BatchAccumulator, DeliveryClient

__all__ = ["BatchAccumulator", "DeliveryClient"]
