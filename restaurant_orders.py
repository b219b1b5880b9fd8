from abc import ABC, abstractmethod
from typing import List, Optional, Union
from decimal import Decimal
from enum import Enum
from threading import Lock, RLock
import logging
import os


logger = logging.getLogger(__name__)

EXTRA_CHEESE_PRICE = Decimal('1.50')
EXTRA_SAUCE_PRICE = Decimal('0.75')

PriceLike = Union[Decimal, int, float, str]


# ==================== Enums ====================

class DishCategory(Enum):
    """Menu categories, valued with their display label"""
    MAIN_COURSE = "Plato Principal"
    BEVERAGE = "Bebida"
    DESSERT = "Postre"


class OrderState(Enum):
    """Order lifecycle states"""
    RECEIVED = "RECEIVED"
    IN_PREPARATION = "IN_PREPARATION"
    READY_FOR_PICKUP = "READY_FOR_PICKUP"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# ==================== Exceptions ====================

class InvalidDishTypeError(ValueError):
    """Raised by the factory for a dish type tag it does not know"""

    def __init__(self, dish_type: str):
        super().__init__(f"Unknown dish type: {dish_type!r}")
        self.dish_type = dish_type


# ==================== Dish Component ====================

class Dish(ABC):
    """A priced, named, describable menu entry"""

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_price(self) -> Decimal:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_description()!r}, price=${self.get_price()})"


class BaseDish(Dish):
    """Concrete undecorated dish"""

    def __init__(self, name: str, base_price: Decimal, category: DishCategory):
        self._name = name
        self._base_price = base_price
        self._category = category

    def get_name(self) -> str:
        return self._name

    def get_price(self) -> Decimal:
        return self._base_price

    def get_category(self) -> DishCategory:
        return self._category

    def get_description(self) -> str:
        return f"{self._category.value}: {self._name}"


class MainCourse(BaseDish):
    def __init__(self, name: str, base_price: Decimal):
        super().__init__(name, base_price, DishCategory.MAIN_COURSE)


class Beverage(BaseDish):
    def __init__(self, name: str, base_price: Decimal):
        super().__init__(name, base_price, DishCategory.BEVERAGE)


class Dessert(BaseDish):
    def __init__(self, name: str, base_price: Decimal):
        super().__init__(name, base_price, DishCategory.DESSERT)


# ==================== Decorator Pattern: Dish Extras ====================

class DishDecorator(Dish):
    """
    Wraps exactly one dish and forwards every operation to it.
    Subclasses add to the forwarded price and description; nothing is
    cached, so each call walks the whole chain down to the base dish.
    """

    def __init__(self, dish: Dish):
        self._dish = dish

    def get_wrapped(self) -> Dish:
        return self._dish

    def get_name(self) -> str:
        return self._dish.get_name()

    def get_price(self) -> Decimal:
        return self._dish.get_price()

    def get_description(self) -> str:
        return self._dish.get_description()


class ExtraCheese(DishDecorator):
    """Adds extra cheese to a dish"""

    def __init__(self, dish: Dish):
        super().__init__(dish)
        logger.debug("Decorated %r with extra cheese", dish.get_name())

    def get_price(self) -> Decimal:
        return super().get_price() + EXTRA_CHEESE_PRICE

    def get_description(self) -> str:
        return super().get_description() + " (con extra queso)"


class ExtraSauce(DishDecorator):
    """Adds an extra sauce of the given kind to a dish"""

    def __init__(self, dish: Dish, sauce_kind: str):
        super().__init__(dish)
        self._sauce_kind = sauce_kind
        logger.debug("Decorated %r with extra %s sauce", dish.get_name(), sauce_kind)

    def get_sauce_kind(self) -> str:
        return self._sauce_kind

    def get_price(self) -> Decimal:
        return super().get_price() + EXTRA_SAUCE_PRICE

    def get_description(self) -> str:
        return super().get_description() + f" (con extra salsa {self._sauce_kind})"


# ==================== Factory Pattern: Dish Factory ====================

class DishFactory:
    """Creates concrete dishes from a dish type tag"""

    _DISH_TYPES = {
        "principal": MainCourse,
        "bebida": Beverage,
        "postre": Dessert,
    }

    def create_dish(self, kind: str, name: str, price: PriceLike) -> Dish:
        """
        Create a dish of the given kind.
        The tag is matched case-insensitively; the price is taken as given.
        Raises InvalidDishTypeError for an unknown tag.
        """
        dish_class = self._DISH_TYPES.get(kind.lower())
        if dish_class is None:
            raise InvalidDishTypeError(kind)

        dish = dish_class(name, Decimal(str(price)))
        logger.debug("Created %r", dish)
        return dish

    def get_supported_types(self) -> List[str]:
        return list(self._DISH_TYPES)


# ==================== Order Ids ====================

class OrderIdGenerator:
    """Thread-safe source of strictly increasing order ids"""

    def __init__(self, start: int = 1):
        self._next_id = start
        self._lock = Lock()

    def next_id(self) -> int:
        with self._lock:
            order_id = self._next_id
            self._next_id += 1
            return order_id


_default_id_generator = OrderIdGenerator()


# ==================== Observer Pattern: Order Notifications ====================

class OrderObserver(ABC):
    """Receives order state change notifications"""

    @abstractmethod
    def on_order_changed(self, order: 'Order') -> None:
        pass


class OrderSubject(ABC):
    """Something order observers can subscribe to"""

    @abstractmethod
    def register_observer(self, observer: OrderObserver) -> None:
        pass

    @abstractmethod
    def remove_observer(self, observer: OrderObserver) -> None:
        pass

    @abstractmethod
    def notify_observers(self) -> None:
        pass


class Customer(OrderObserver):
    """Customer following the state of one or more orders"""

    def __init__(self, name: str):
        self._name = name
        self._notifications: List[tuple] = []

    def get_name(self) -> str:
        return self._name

    def get_notifications(self) -> List[tuple]:
        """(order id, state) pairs in the order they were received"""
        return self._notifications.copy()

    def on_order_changed(self, order: 'Order') -> None:
        state = order.get_state()
        self._notifications.append((order.get_id(), state))
        logger.info("Customer %s notified: order #%d is %s",
                    self._name, order.get_id(), state.value)
        print(f"Notification for customer '{self._name}': "
              f"order #{order.get_id()} changed its state to {state.value}")

    def __repr__(self) -> str:
        return f"Customer({self._name})"


# ==================== Order ====================

class Order(OrderSubject):
    """
    An append-only list of dishes with a lifecycle state.

    Observers are notified on every state change, never on item changes.
    Registering the same observer twice is ignored (identity check).
    Notification iterates a snapshot taken when it starts, outside the
    order lock: an observer removed by another observer's callback still
    gets the current round, but no later ones.
    """

    def __init__(self, id_generator: Optional[OrderIdGenerator] = None):
        generator = id_generator or _default_id_generator
        self._order_id = generator.next_id()
        self._items: List[Dish] = []
        self._state = OrderState.RECEIVED
        self._observers: List[OrderObserver] = []

        # Lock
        self._lock = RLock()

    def get_id(self) -> int:
        return self._order_id

    def get_state(self) -> OrderState:
        with self._lock:
            return self._state

    def add_item(self, dish: Dish) -> None:
        """Append a dish to the order"""
        with self._lock:
            self._items.append(dish)
        logger.debug("'%s' added to order %d", dish.get_description(), self._order_id)

    def get_items(self) -> List[Dish]:
        with self._lock:
            return self._items.copy()

    def get_total(self) -> Decimal:
        with self._lock:
            items = self._items.copy()
        return sum((item.get_price() for item in items), Decimal('0'))

    def set_state(self, new_state: OrderState) -> None:
        """Move to new_state and notify observers; no-op if unchanged"""
        with self._lock:
            if self._state == new_state:
                return
            previous = self._state
            self._state = new_state
            observers = self._observers.copy()

        logger.info("Order %d: %s -> %s", self._order_id, previous.value, new_state.value)
        self._fan_out(observers)

    def cancel(self) -> None:
        self.set_state(OrderState.CANCELLED)

    def register_observer(self, observer: OrderObserver) -> None:
        with self._lock:
            if any(o is observer for o in self._observers):
                logger.debug("%r already observes order %d", observer, self._order_id)
                return
            self._observers.append(observer)
        logger.debug("%r now observes order %d", observer, self._order_id)

    def remove_observer(self, observer: OrderObserver) -> None:
        with self._lock:
            for i, registered in enumerate(self._observers):
                if registered is observer:
                    del self._observers[i]
                    logger.debug("%r no longer observes order %d", observer, self._order_id)
                    return

    def get_observers(self) -> List[OrderObserver]:
        with self._lock:
            return self._observers.copy()

    def notify_observers(self) -> None:
        self._fan_out(self.get_observers())

    def _fan_out(self, observers: List[OrderObserver]) -> None:
        # Called without the lock held
        for observer in observers:
            observer.on_order_changed(self)

    def format_details(self) -> str:
        """Human readable summary of the order"""
        with self._lock:
            items = self._items.copy()
            state = self._state

        lines = [f"--- Order #{self._order_id} details ---", f"State: {state.value}"]
        if not items:
            lines.append("The order is empty.")
        else:
            lines.append("Items:")
            for item in items:
                lines.append(f"  - {item.get_description():<40} ${item.get_price():.2f}")
        total = sum((item.get_price() for item in items), Decimal('0'))
        lines.append(f"Order total: ${total:.2f}")
        return "\n".join(lines)

    def display_details(self) -> None:
        print(self.format_details())

    def __repr__(self) -> str:
        return f"Order(id={self._order_id}, state={self.get_state().value})"


# ==================== Demo Usage ====================

def _demo_log_level() -> int:
    """Level named by RESTAURANT_ORDERS_LOG_LEVEL, WARNING when unset or unknown"""
    name = os.environ.get("RESTAURANT_ORDERS_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def _change_state(order: Order, new_state: OrderState) -> None:
    print(f"\n--- ORDER {order.get_id()} STATE CHANGE ---")
    print(f"Previous state: {order.get_state().value}")
    order.set_state(new_state)
    print(f"New state: {order.get_state().value}")
    print("---------------------------------")


def main():
    """Demo the restaurant order patterns"""
    logging.basicConfig(
        level=_demo_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("=== Restaurant Order Management ===\n")

    # 1. Factory method
    print("--- FACTORY METHOD ---")
    factory = DishFactory()
    pizza = factory.create_dish("principal", "Pizza Margherita", "12.50")
    cola = factory.create_dish("bebida", "Refresco de Cola", "2.00")
    ice_cream = factory.create_dish("postre", "Helado de Chocolate", "4.75")

    for dish in (pizza, cola, ice_cream):
        print(f"Dish created: {dish.get_description()} - ${dish.get_price()}")

    try:
        factory.create_dish("desconocido", "Mystery Dish", "1.00")
    except InvalidDishTypeError as e:
        print(f"Could not create dish: {e}")

    # 2. Decorator
    print("\n--- DECORATOR ---")
    cheesy_pizza = ExtraCheese(pizza)
    print(f"Decorated dish: {cheesy_pizza.get_description()} - ${cheesy_pizza.get_price()}")

    loaded_pizza = ExtraSauce(cheesy_pizza, "Picante")
    print(f"Decorated dish: {loaded_pizza.get_description()} - ${loaded_pizza.get_price()}")

    burger = ExtraCheese(factory.create_dish("principal", "Hamburguesa Clásica", "8.00"))
    print(f"Decorated dish: {burger.get_description()} - ${burger.get_price()}")

    # 3. Order with items
    print("\n--- ORDER CREATION ---")
    order = Order()
    print(f"Created order #{order.get_id()}")

    order.add_item(loaded_pizza)
    order.add_item(cola)
    order.add_item(ExtraSauce(factory.create_dish("postre", "Flan Casero", "3.50"), "Caramelo"))
    order.display_details()

    # 4. Observer
    print("\n--- OBSERVER ---")
    ana = Customer("Ana")
    juan = Customer("Juan")
    order.register_observer(ana)
    order.register_observer(juan)
    print(f"Customers '{ana.get_name()}' and '{juan.get_name()}' are following order #{order.get_id()}")

    _change_state(order, OrderState.IN_PREPARATION)
    _change_state(order, OrderState.READY_FOR_PICKUP)

    order.remove_observer(juan)
    print(f"\nCustomer '{juan.get_name()}' stopped following order #{order.get_id()}")

    _change_state(order, OrderState.DELIVERED)

    # Observers are per order
    print("\n--- ANOTHER ORDER ---")
    second_order = Order()
    luis = Customer("Luis")
    second_order.register_observer(luis)
    second_order.add_item(factory.create_dish("bebida", "Jugo de Naranja", "2.50"))

    _change_state(second_order, OrderState.IN_PREPARATION)
    _change_state(second_order, OrderState.READY_FOR_PICKUP)
    _change_state(second_order, OrderState.DELIVERED)
    second_order.display_details()

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()


# ## Key Design Decisions

# ### **Design Patterns Used:**

# 1. **Factory Method**:
#    - `DishFactory.create_dish`: maps "principal" / "bebida" / "postre"
#      (any letter case) to MainCourse / Beverage / Dessert
#    - Unknown tags raise `InvalidDishTypeError`, a `ValueError`

# 2. **Decorator Pattern**:
#    - `ExtraCheese`: +1.50, " (con extra queso)"
#    - `ExtraSauce`: +0.75, " (con extra salsa <kind>)"
#    - Decorators nest freely; price and description are recomputed on every call

# 3. **Observer Pattern**:
#    - `Order` is the subject, `Customer` the observer
#    - Only state changes notify; setting the current state again is a no-op
#    - Same observer registered twice is notified once

# ### **Thread Safety:**
# - One RLock per order guards items, state and observers
# - Observers are called outside the lock with a snapshot of the list
# - `OrderIdGenerator` hands out strictly increasing ids under its own lock
