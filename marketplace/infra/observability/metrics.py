from prometheus_client import Counter, Histogram


# Catalog Metrics
products_created_total = Counter("marketplace_products_created_total", "Total products created")

# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed", ["status"])
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, float("inf")],
)

# Favorite Metrics
favorites_added_total = Counter("marketplace_favorites_added_total", "Total favorites added")

# Account Metrics
users_registered_total = Counter("marketplace_users_registered_total", "Total users registered")
login_attempts_total = Counter("marketplace_login_attempts_total", "Login attempts", ["outcome"])
cascade_deleted_total = Counter(
    "marketplace_cascade_deleted_total", "Records removed by account deletion cascades", ["entity"]
)
