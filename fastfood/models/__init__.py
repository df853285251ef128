from .base import Base
from .user import User, UserRole, PaymentMethod
from .meal import Meal
from .restaurant import Restaurant, RestaurantMenuItem
from .order import Order, OrderItem, OrderStatus, Fulfillment
