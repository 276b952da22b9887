"""
Cart Notification Messages

Fixed set of human-readable strings sent to the notification sink when a
cart operation is rejected or fails.
"""

# Validation rejections
OUT_OF_STOCK = "Requested quantity out of stock"
REMOVE_PRODUCT_FAILED = "Failed to remove product"
UPDATE_AMOUNT_FAILED = "Failed to change product quantity"

# Unexpected failures
ADD_PRODUCT_FAILED = "Failed to add product"
STOCK_LIMIT_REACHED = "Stock limit reached"

ALL_MESSAGES = frozenset({
    OUT_OF_STOCK,
    REMOVE_PRODUCT_FAILED,
    UPDATE_AMOUNT_FAILED,
    ADD_PRODUCT_FAILED,
    STOCK_LIMIT_REACHED,
})
