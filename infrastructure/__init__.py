"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies.

Modules:
    - payments: Payment provider abstraction (Razorpay gateway, demo mode)
    - cache: TTL-tiered response cache and invalidation helpers
    - observability: tracing setup and shared Prometheus metrics
    - container: lazily wired services
"""
