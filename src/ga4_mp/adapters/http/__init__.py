"""HTTP adapter – Measurement Protocol transport."""
from ga4_mp.adapters.http.transport import HttpTransport, RequestFunc, ResponseLike, error_for_response

__all__ = ["HttpTransport", "RequestFunc", "ResponseLike", "error_for_response"]
