from prometheus_client import Counter, Gauge

# Response cache metrics
response_cache_hits_total = Counter("vendora_response_cache_hits_total", "Response cache hits", ["tier"])
response_cache_misses_total = Counter("vendora_response_cache_misses_total", "Response cache misses", ["tier"])
response_cache_invalidations_total = Counter(
    "vendora_response_cache_invalidations_total", "Response cache invalidations", ["tier", "kind"]
)
response_cache_keys = Gauge("vendora_response_cache_keys", "Indexed keys per response cache tier", ["tier"])

# Payment gateway metrics
gateway_fallbacks_total = Counter(
    "vendora_payment_gateway_fallbacks_total", "Checkouts that fell back to demo mode", ["reason"]
)
