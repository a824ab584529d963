from .user import User
from .guide import Guide
from .destination import Destination
from .tour import Tour
from .booking import Booking
from .review import Review
from .notification import Notification



__all__ = ["User", "Guide", "Destination", "Tour", "Booking", "Review", "Notification"]
