from prometheus_client import Counter

DONATIONS_CREATED = Counter(
    "givetrack_donations_created_total",
    "Donations submitted by donors",
)

PAYMENT_STATUS_CHANGES = Counter(
    "givetrack_payment_status_changes_total",
    "Payment status updates applied by administrators",
    ["status"],
)
