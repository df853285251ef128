from fastfood.models.order import OrderStatus

# Orders still sitting in the kitchen queue (used for the ready-time estimate)
QUEUED_ORDER_STATUSES = (OrderStatus.ORDERED, OrderStatus.PREPARING)

# Anything short of delivered blocks restaurant deletion
OPEN_ORDER_STATUSES = (OrderStatus.ORDERED, OrderStatus.PREPARING, OrderStatus.DELIVERING)

TOP_MEALS_LIMIT = 5

MAX_LINE_QUANTITY = 1000
