from prometheus_client import Counter, Histogram


# Order Metrics
orders_created_total = Counter("marketplace_orders_created_total", "Pending orders created", ["mode"])
orders_confirmed_total = Counter("marketplace_orders_confirmed_total", "Orders confirmed as paid", ["mode"])
order_confirmation_failures_total = Counter(
    "marketplace_order_confirmation_failures_total", "Payment confirmations rejected", ["mode", "reason"]
)
order_confirmation_duration = Histogram(
    "marketplace_order_confirmation_seconds", "Time spent in the payment confirmation transaction"
)
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, float("inf")],
)
orders_cancelled_total = Counter("marketplace_orders_cancelled_total", "Orders cancelled", ["from_status"])

# Stock Metrics
stock_decrement_conflicts_total = Counter(
    "marketplace_stock_decrement_conflicts_total", "Conditional stock decrements that found too little stock"
)

# Review Metrics
reviews_created_total = Counter("marketplace_reviews_created_total", "Reviews created")

# Moderation Metrics
reports_filed_total = Counter("marketplace_reports_filed_total", "Vendor reports filed")
bug_reports_submitted_total = Counter(
    "marketplace_bug_reports_submitted_total", "Support bug reports submitted", ["category"]
)
