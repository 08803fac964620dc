# Importing the models registers their tables on Base.metadata
from tailors.models.customer import Customer
from tailors.models.measurement import Measurement
from tailors.models.order import DEFAULT_ORDER_STATUS, Order

__all__ = ["Customer", "Measurement", "Order", "DEFAULT_ORDER_STATUS"]
