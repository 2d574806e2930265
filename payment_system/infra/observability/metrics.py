from prometheus_client import Counter


# Payment metrics
payments_recorded_total = Counter("payment_payments_recorded_total", "Confirmed payments recorded", ["mode"])
payment_volume_total = Counter("payment_volume_total", "Total payment volume processed", ["currency", "mode"])

# Payout metrics
payouts_computed_total = Counter("payment_payouts_computed_total", "Vendor payout rows written")
payout_computation_failures_total = Counter(
    "payment_payout_computation_failures_total", "Payout computations that failed and were queued for reconciliation"
)
payout_volume_total = Counter("payout_volume_total", "Total payout volume by status", ["currency", "status"])
