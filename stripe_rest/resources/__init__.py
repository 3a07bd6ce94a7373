from stripe_rest.resources.coupons import Coupons
from stripe_rest.resources.customers import Customers
from stripe_rest.resources.orders import Orders
from stripe_rest.resources.products import Products

__all__ = [
    "Coupons",
    "Customers",
    "Orders",
    "Products",
]
